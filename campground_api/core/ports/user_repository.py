# campground_api/core/ports/user_repository.py
from typing import Optional, Protocol

from campground_api.core.domain.models import User


class IUserRepository(Protocol):
    """
    Port for user accounts.
    Password hashing and verification happen inside the implementation;
    the plain password is never stored or returned.
    """

    def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup."""
        ...

    def find_by_username(self, username: str) -> Optional[User]:
        ...

    def create(self, *, email: str, username: str, password: str) -> User:
        ...

    def verify_credentials(self, username: str, password: str) -> Optional[User]:
        """Returns the user iff `password` matches the stored credential."""
        ...

    def count(self) -> int:
        ...
