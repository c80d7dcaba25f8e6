# campground_api/adapters/api/schemas.py
"""
Response DTOs. Field names go out in camelCase (`authorId`, `reviewIds`,
`createdAt`); domain entities are converted with `model_validate(entity)`.
"""
from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserRead(ApiModel):
    id: str
    username: str
    email: str
    created_at: Optional[datetime] = None


class ImageRead(ApiModel):
    url: str
    filename: str

    def _variant(self, transformation: str) -> str:
        return self.url.replace("/upload", f"/upload/{transformation}", 1)

    @computed_field
    @property
    def thumbnail(self) -> str:
        return self._variant("w_200,h_200,c_fill,q_auto:low")

    @computed_field
    @property
    def small(self) -> str:
        return self._variant("w_400,q_auto:good")

    @computed_field
    @property
    def medium(self) -> str:
        return self._variant("w_800,q_auto:good")


class GeometryRead(ApiModel):
    type: Literal["Point"] = "Point"
    coordinates: Tuple[float, float]


class ReviewRead(ApiModel):
    id: str
    body: str
    rating: int
    author_id: str
    author: Optional[UserRead] = None
    campground_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CampgroundRead(ApiModel):
    id: str
    title: str
    description: str
    location: str
    geometry: GeometryRead
    price: float
    images: List[ImageRead]
    author_id: str
    author: Optional[UserRead] = None
    review_ids: List[str]
    reviews: List[ReviewRead]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Stats(ApiModel):
    campgrounds: int = 0
    reviews: int = 0
    users: int = 0


class HomeResponse(ApiModel):
    featured_campgrounds: List[CampgroundRead]
    stats: Stats


class HealthResponse(ApiModel):
    status: str
    timestamp: str
    uptime: float
    environment: str
    database: Literal["connected", "disconnected"]


class MessageResponse(ApiModel):
    success: bool
    message: str
