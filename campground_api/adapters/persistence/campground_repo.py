# campground_api/adapters/persistence/campground_repo.py

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from campground_api.core.domain.models import Campground, CampgroundChanges, Geometry, Image

from .mappers import campground_to_domain, parse_id
from .models import CampgroundRow, ReviewRow


class SqlAlchemyCampgroundRepository:
    """
    Thin data-access layer around CampgroundRow.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    def _base_select(self) -> Select[Any]:
        return select(CampgroundRow).order_by(CampgroundRow.created_at)

    def _get_row(self, campground_id: str) -> Optional[CampgroundRow]:
        key = parse_id(campground_id)
        if key is None:
            return None
        return self.session.get(CampgroundRow, key)

    def _save(self, row: CampgroundRow) -> Campground:
        self.session.add(row)
        self.session.flush()
        return campground_to_domain(row)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def find_all(self) -> List[Campground]:
        result = self.session.execute(self._base_select())
        return [campground_to_domain(row) for row in result.scalars().all()]

    def find_by_id(self, campground_id: str) -> Optional[Campground]:
        row = self._get_row(campground_id)
        return campground_to_domain(row) if row is not None else None

    def find_by_id_with_relations(self, campground_id: str) -> Optional[Campground]:
        row = self._get_row(campground_id)
        if row is None:
            return None

        review_ids = list(row.review_ids or [])
        reviews: List[ReviewRow] = []
        if review_ids:
            stmt = select(ReviewRow).where(ReviewRow.id.in_(review_ids))
            by_id = {r.id: r for r in self.session.execute(stmt).scalars().all()}
            reviews = [by_id[rid] for rid in review_ids if rid in by_id]

        return campground_to_domain(row, reviews=reviews)

    def find_many(self, limit: int) -> List[Campground]:
        stmt = self._base_select().limit(limit)
        result = self.session.execute(stmt)
        return [campground_to_domain(row) for row in result.scalars().all()]

    def count(self) -> int:
        stmt = select(func.count()).select_from(CampgroundRow)
        return int(self.session.scalar(stmt) or 0)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(
        self,
        *,
        title: str,
        description: str,
        location: str,
        price: float,
        geometry: Geometry,
        images: Sequence[Image],
        author_id: str,
    ) -> Campground:
        row = CampgroundRow(
            title=title,
            description=description,
            location=location,
            price=price,
            geometry=geometry.model_dump(mode="json"),
            images=[img.model_dump() for img in images],
            review_ids=[],
            author_id=author_id,
        )
        return self._save(row)

    def update(self, campground_id: str, changes: CampgroundChanges) -> Optional[Campground]:
        row = self._get_row(campground_id)
        if row is None:
            return None

        if changes.title is not None:
            row.title = changes.title
        if changes.description is not None:
            row.description = changes.description
        if changes.location is not None:
            row.location = changes.location
        if changes.price is not None:
            row.price = changes.price
        if changes.geometry is not None:
            row.geometry = changes.geometry.model_dump(mode="json")

        return self._save(row)

    # JSON columns are reassigned, never mutated in place, so the ORM sees the change.

    def add_images(self, campground_id: str, images: Sequence[Image]) -> Optional[Campground]:
        row = self._get_row(campground_id)
        if row is None:
            return None
        row.images = list(row.images or []) + [img.model_dump() for img in images]
        return self._save(row)

    def remove_images(self, campground_id: str, filenames: Sequence[str]) -> Optional[Campground]:
        row = self._get_row(campground_id)
        if row is None:
            return None
        doomed = set(filenames)
        row.images = [img for img in (row.images or []) if img.get("filename") not in doomed]
        return self._save(row)

    def append_review(self, campground_id: str, review_id: str) -> Optional[Campground]:
        row = self._get_row(campground_id)
        if row is None:
            return None
        row.review_ids = list(row.review_ids or []) + [review_id]
        return self._save(row)

    def pull_review(self, campground_id: str, review_id: str) -> Optional[Campground]:
        row = self._get_row(campground_id)
        if row is None:
            return None
        current = list(row.review_ids or [])
        if review_id in current:
            row.review_ids = [rid for rid in current if rid != review_id]
            return self._save(row)
        return campground_to_domain(row)

    def delete(self, campground_id: str) -> bool:
        row = self._get_row(campground_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True
