from .exceptions import (
    ConfigurationError,
    DomainError,
    DuplicateUserError,
    ForbiddenError,
    NotFoundError,
    ReviewAttachError,
    UnauthenticatedError,
    UpstreamFailureError,
    ValidationFailedError,
)
from .models import (
    Campground,
    CampgroundChanges,
    CampgroundFields,
    Geometry,
    Image,
    Review,
    ReviewFields,
    User,
)

__all__ = [
    "Campground",
    "CampgroundChanges",
    "CampgroundFields",
    "Geometry",
    "Image",
    "Review",
    "ReviewFields",
    "User",
    "ConfigurationError",
    "DomainError",
    "DuplicateUserError",
    "ForbiddenError",
    "NotFoundError",
    "ReviewAttachError",
    "UnauthenticatedError",
    "UpstreamFailureError",
    "ValidationFailedError",
]
