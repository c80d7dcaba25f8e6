"""
campground_api.adapters.persistence
===================================

SQLAlchemy implementations of the repository ports, plus the engine,
session and unit-of-work helpers:

    from campground_api.adapters.persistence import session_scope, SqlAlchemyCampgroundRepository
"""

from .campground_repo import SqlAlchemyCampgroundRepository
from .database import create_db_engine, create_session_factory, init_db, ping, session_scope
from .models import Base
from .review_repo import SqlAlchemyReviewRepository
from .user_repo import SqlAlchemyUserRepository

__all__ = [
    "Base",
    "SqlAlchemyCampgroundRepository",
    "SqlAlchemyReviewRepository",
    "SqlAlchemyUserRepository",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "ping",
    "session_scope",
]
