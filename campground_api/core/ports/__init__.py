"""
Core Ports (Interfaces).

Protocols that the infrastructure adapters implement. The services only
depend on these, never on SQLAlchemy, httpx or a concrete image host.
"""

from .campground_repository import ICampgroundRepository
from .geocoder import IGeocoder
from .image_store import IImageStore
from .review_repository import IReviewRepository
from .user_repository import IUserRepository

__all__ = [
    "ICampgroundRepository",
    "IGeocoder",
    "IImageStore",
    "IReviewRepository",
    "IUserRepository",
]
