"""
Application services.

Routers import service classes from here instead of depending directly on
repositories or outbound adapters.
"""

from .campground_service import CampgroundService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "CampgroundService",
    "ReviewService",
    "UserService",
]
