from . import campgrounds, home, reviews, users

__all__ = ["campgrounds", "home", "reviews", "users"]
