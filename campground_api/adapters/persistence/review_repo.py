# campground_api/adapters/persistence/review_repo.py

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campground_api.core.domain.models import Review

from .mappers import parse_id, review_to_domain
from .models import ReviewRow


class SqlAlchemyReviewRepository:
    """
    Thin data-access layer around ReviewRow.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def _get_row(self, review_id: str) -> Optional[ReviewRow]:
        key = parse_id(review_id)
        if key is None:
            return None
        return self.session.get(ReviewRow, key)

    def find_by_id(self, review_id: str) -> Optional[Review]:
        row = self._get_row(review_id)
        return review_to_domain(row) if row is not None else None

    def create(self, *, body: str, rating: int, author_id: str, campground_id: str) -> Review:
        row = ReviewRow(
            body=body,
            rating=rating,
            author_id=author_id,
            campground_id=campground_id,
        )
        self.session.add(row)
        self.session.flush()
        return review_to_domain(row)

    def delete(self, review_id: str) -> bool:
        row = self._get_row(review_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True

    def delete_many(self, review_ids: Sequence[str]) -> int:
        keys = [k for k in (parse_id(rid) for rid in review_ids) if k is not None]
        if not keys:
            return 0
        stmt = select(ReviewRow).where(ReviewRow.id.in_(keys))
        rows = list(self.session.execute(stmt).scalars().all())
        for row in rows:
            self.session.delete(row)
        self.session.flush()
        return len(rows)

    def count(self) -> int:
        stmt = select(func.count()).select_from(ReviewRow)
        return int(self.session.scalar(stmt) or 0)
