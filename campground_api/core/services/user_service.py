# campground_api/core/services/user_service.py
from typing import Optional

import structlog

from campground_api.core.domain.exceptions import DuplicateUserError
from campground_api.core.domain.models import User
from campground_api.core.ports.user_repository import IUserRepository

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """
    Registration, credential checks and lookups for user accounts.
    """

    def __init__(self, user_repo: IUserRepository):
        self.user_repo = user_repo

    def register(self, email: str, username: str, password: str) -> User:
        """
        Creates an account. Email is trimmed and lower-cased; both email and
        username must be unused.
        """
        email = normalize_email(email)
        username = username.strip()

        if self.user_repo.find_by_email(email) is not None:
            raise DuplicateUserError("email")
        if self.user_repo.find_by_username(username) is not None:
            raise DuplicateUserError("username")

        user = self.user_repo.create(email=email, username=username, password=password)
        logger.info("user_registered", user_id=user.id, username=user.username)
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.user_repo.verify_credentials(username.strip(), password)
        if user is None:
            logger.info("login_failed", username=username)
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.user_repo.find_by_id(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.user_repo.find_by_email(normalize_email(email))

    def get_by_username(self, username: str) -> Optional[User]:
        return self.user_repo.find_by_username(username.strip())

    def count(self) -> int:
        return self.user_repo.count()
