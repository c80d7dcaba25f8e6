# campground_api/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Lookup Errors ---

class NotFoundError(DomainError):
    """Raised when an id does not resolve to a stored record."""
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)

# --- Access Errors ---

class UnauthenticatedError(DomainError):
    """Raised when a route requires a session and none is present."""
    status_code = 401

    def __init__(self, message: str = "You must be signed in"):
        super().__init__(message)

class ForbiddenError(DomainError):
    """Raised when the caller is authenticated but does not own the resource."""
    status_code = 403

    def __init__(self, message: str = "You do not have permission to do that"):
        super().__init__(message)

# --- Input Errors ---

class ValidationFailedError(DomainError):
    """Raised when request input fails schema validation. Carries every field message."""
    status_code = 400

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(", ".join(self.messages) or "Validation failed")

class DuplicateUserError(DomainError):
    """Raised when registering an email or username that is already taken."""
    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"A user with the given {field} is already registered")

# --- Collaborator Errors ---

class UpstreamFailureError(DomainError):
    """Raised when an external collaborator (e.g. geocoding) yields no usable result."""
    status_code = 400

class ReviewAttachError(DomainError):
    """Raised when a created review could not be appended to its campground."""
    status_code = 500

    def __init__(self, campground_id: str, review_id: str):
        self.campground_id = campground_id
        self.review_id = review_id
        super().__init__(
            f"Review '{review_id}' could not be attached to campground '{campground_id}'."
        )

# --- Infrastructure Errors ---

class ConfigurationError(DomainError):
    """Raised when an adapter is used without the credentials it needs."""
    status_code = 500
