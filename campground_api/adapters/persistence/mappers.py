# campground_api/adapters/persistence/mappers.py
"""
Row -> domain entity mapping. The domain layer never sees ORM rows or raw
foreign keys without the resolved author next to them.
"""

import uuid
from typing import Any, Optional, Sequence

from campground_api.core.domain.models import Campground, Geometry, Image, Review, User

from .models import CampgroundRow, ReviewRow, UserRow


def parse_id(value: Any) -> Optional[str]:
    """
    Normalize an external id to the stored 32-char hex form.
    Anything that is not a UUID maps to None, i.e. "not found".
    """
    if value is None:
        return None
    try:
        return uuid.UUID(str(value)).hex
    except (ValueError, AttributeError, TypeError):
        return None


def user_to_domain(row: UserRow) -> User:
    return User(
        id=row.id,
        email=row.email,
        username=row.username,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def review_to_domain(row: ReviewRow) -> Review:
    return Review(
        id=row.id,
        body=row.body,
        rating=row.rating,
        author_id=row.author_id,
        author=user_to_domain(row.author) if row.author is not None else None,
        campground_id=row.campground_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def campground_to_domain(
    row: CampgroundRow,
    reviews: Optional[Sequence[ReviewRow]] = None,
) -> Campground:
    geometry = row.geometry or {}
    return Campground(
        id=row.id,
        title=row.title,
        description=row.description,
        location=row.location,
        price=row.price,
        geometry=Geometry(
            type=geometry.get("type", "Point"),
            coordinates=tuple(geometry.get("coordinates", (0.0, 0.0))),
        ),
        images=[Image(url=img["url"], filename=img["filename"]) for img in (row.images or [])],
        author_id=row.author_id,
        author=user_to_domain(row.author) if row.author is not None else None,
        review_ids=list(row.review_ids or []),
        reviews=[review_to_domain(r) for r in (reviews or [])],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
