# campground_api/core/domain/models.py
from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# --- Value Objects ---

class Image(BaseModel):
    """An uploaded image owned by exactly one campground."""
    model_config = ConfigDict(frozen=True)

    url: str
    filename: str  # key in the image store; used again only for deletion


class Geometry(BaseModel):
    """GeoJSON point produced by geocoding a location string."""
    model_config = ConfigDict(frozen=True)

    type: Literal["Point"] = "Point"
    coordinates: Tuple[float, float] = Field(..., description="[longitude, latitude]")


# --- Entities ---

class User(BaseModel):
    """
    A registered account. The password credential lives only in the
    persistence adapter and is never part of the domain entity.
    """
    id: str
    email: str
    username: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Review(BaseModel):
    """A star rating plus comment, attached to exactly one campground."""
    id: str
    body: str
    rating: int
    author_id: str
    author: Optional[User] = None
    campground_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Campground(BaseModel):
    """
    A listing. `review_ids` is the ordered list of attached reviews;
    `reviews` is only filled by relation-resolving reads.
    """
    id: str
    title: str
    description: str
    location: str
    geometry: Geometry
    price: float
    images: List[Image] = Field(default_factory=list)
    author_id: str
    author: Optional[User] = None
    review_ids: List[str] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Inputs ---

class CampgroundFields(BaseModel):
    """Scalar fields supplied when creating a campground."""
    title: str
    description: str
    location: str
    price: float


class CampgroundChanges(BaseModel):
    """Partial update; only the fields that are set are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    geometry: Optional[Geometry] = None


class ReviewFields(BaseModel):
    body: str
    rating: int
