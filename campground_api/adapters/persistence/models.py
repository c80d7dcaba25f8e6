# campground_api/adapters/persistence/models.py

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
)
from sqlalchemy.orm import (
    declarative_base,
    relationship,
    Mapped,
    mapped_column,
)

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserRow(Base):
    """
    Registered account. `password_hash` never leaves the persistence layer.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    username: Mapped[str] = mapped_column(String(150), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<UserRow id={self.id!r} username={self.username!r}>"


# ---------------------------------------------------------------------------
# Campgrounds
# ---------------------------------------------------------------------------


class CampgroundRow(Base):
    """
    A campground listing, stored document-style: images, geometry and the
    ordered review id list are JSON columns on the row.
    """

    __tablename__ = "campgrounds"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    # {"type": "Point", "coordinates": [lon, lat]}
    geometry: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)

    # [{"url": ..., "filename": ...}, ...]
    images: Mapped[List[Dict[str, str]]] = mapped_column(JSON, nullable=False, default=list)

    # Ordered ids of attached reviews
    review_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    author_id: Mapped[str] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[UserRow] = relationship("UserRow", lazy="joined")

    def __repr__(self) -> str:
        return f"<CampgroundRow id={self.id!r} title={self.title!r}>"


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


class ReviewRow(Base):
    """
    A review. `campground_id` records the parent it was created for; the
    parent's `review_ids` list is the authoritative attachment.
    """

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    author_id: Mapped[str] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    campground_id: Mapped[Optional[str]] = mapped_column(
        String(32),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[UserRow] = relationship("UserRow", lazy="joined")

    def __repr__(self) -> str:
        return f"<ReviewRow id={self.id!r} rating={self.rating!r}>"
