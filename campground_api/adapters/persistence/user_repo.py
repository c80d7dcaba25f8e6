# campground_api/adapters/persistence/user_repo.py

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campground_api.core.domain.exceptions import DuplicateUserError
from campground_api.core.domain.models import User

from .mappers import parse_id, user_to_domain
from .models import UserRow
from .passwords import hash_password, verify_password


class SqlAlchemyUserRepository:
    """
    Data-access layer around UserRow. Owns password hashing so the plain
    password never reaches storage or the domain.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def _row_by_username(self, username: str) -> Optional[UserRow]:
        stmt = select(UserRow).where(UserRow.username == username)
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_id(self, user_id: str) -> Optional[User]:
        key = parse_id(user_id)
        if key is None:
            return None
        row = self.session.get(UserRow, key)
        return user_to_domain(row) if row is not None else None

    def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserRow).where(func.lower(UserRow.email) == email.strip().lower())
        row = self.session.execute(stmt).scalar_one_or_none()
        return user_to_domain(row) if row is not None else None

    def find_by_username(self, username: str) -> Optional[User]:
        row = self._row_by_username(username)
        return user_to_domain(row) if row is not None else None

    def create(self, *, email: str, username: str, password: str) -> User:
        row = UserRow(
            email=email.strip().lower(),
            username=username,
            password_hash=hash_password(password),
        )
        self.session.add(row)
        try:
            self.session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent registration.
            self.session.rollback()
            raise DuplicateUserError("email or username") from e
        return user_to_domain(row)

    def verify_credentials(self, username: str, password: str) -> Optional[User]:
        row = self._row_by_username(username)
        if row is None or not verify_password(password, row.password_hash):
            return None
        return user_to_domain(row)

    def count(self) -> int:
        stmt = select(func.count()).select_from(UserRow)
        return int(self.session.scalar(stmt) or 0)
