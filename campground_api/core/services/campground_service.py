# campground_api/core/services/campground_service.py
from typing import List, Optional, Sequence

import structlog

from campground_api.core.domain.models import (
    Campground,
    CampgroundChanges,
    CampgroundFields,
    Geometry,
    Image,
)
from campground_api.core.ports.campground_repository import ICampgroundRepository
from campground_api.core.ports.review_repository import IReviewRepository
from campground_api.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

DEFAULT_IMAGE_URL = (
    "https://images.unsplash.com/photo-1508873696983-2dfd5898f08b"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=2070&q=80"
)
DEFAULT_IMAGE_FILENAME = "default-campground"


class CampgroundService:
    """
    Use cases for campground listings.

    Responsibilities:
    1. Create/update/delete campgrounds through the repository port.
    2. Keep the image list consistent (additions before removals).
    3. Cascade review deletion when a campground is removed.
    4. Decorate featured listings with a placeholder image on the read path only.

    Geocoding is not done here; callers pass the geometry in.
    """

    def __init__(
        self,
        campground_repo: ICampgroundRepository,
        review_repo: IReviewRepository,
    ):
        self.campground_repo = campground_repo
        self.review_repo = review_repo

    def get_all(self) -> List[Campground]:
        return self.campground_repo.find_all()

    def get_by_id(self, campground_id: str) -> Optional[Campground]:
        """Returns the campground with reviews and their authors, or None."""
        return self.campground_repo.find_by_id_with_relations(campground_id)

    def create(
        self,
        fields: CampgroundFields,
        images: Sequence[Image],
        geometry: Geometry,
        author_id: str,
    ) -> Campground:
        with tracer.start_as_current_span("campground_service.create") as span:
            campground = self.campground_repo.create(
                title=fields.title,
                description=fields.description,
                location=fields.location,
                price=fields.price,
                geometry=geometry,
                images=list(images),
                author_id=author_id,
            )
            span.set_attribute("app.campground_id", campground.id)
            logger.info(
                "campground_created",
                campground_id=campground.id,
                author_id=author_id,
                images=len(campground.images),
            )
            return campground

    def update(
        self,
        campground_id: str,
        changes: CampgroundChanges,
        new_images: Optional[Sequence[Image]] = None,
        delete_filenames: Optional[Sequence[str]] = None,
    ) -> Optional[Campground]:
        """
        Applies scalar changes, then appends `new_images`, then drops every
        image whose filename is in `delete_filenames`.
        Returns None if the id does not resolve.
        """
        updated = self.campground_repo.update(campground_id, changes)
        if updated is None:
            return None

        if new_images:
            with_images = self.campground_repo.add_images(campground_id, list(new_images))
            if with_images is not None:
                updated = with_images

        if delete_filenames:
            without_images = self.campground_repo.remove_images(campground_id, list(delete_filenames))
            if without_images is not None:
                updated = without_images

        logger.info(
            "campground_updated",
            campground_id=updated.id,
            added_images=len(new_images or []),
            removed_images=len(delete_filenames or []),
        )
        return updated

    def delete(self, campground_id: str) -> bool:
        """
        Deletes the campground and every review it references.
        Returns False when nothing existed.
        """
        with tracer.start_as_current_span("campground_service.delete"):
            campground = self.campground_repo.find_by_id(campground_id)
            if campground is None:
                return False

            removed_reviews = 0
            if campground.review_ids:
                removed_reviews = self.review_repo.delete_many(campground.review_ids)

            deleted = self.campground_repo.delete(campground.id)
            logger.info(
                "campground_deleted",
                campground_id=campground.id,
                removed_reviews=removed_reviews,
            )
            return deleted

    def get_featured(self, limit: int = 3) -> List[Campground]:
        """
        Up to `limit` campgrounds in storage order. Listings without images get
        a placeholder in the returned copy; stored records are not touched.
        A negative `limit` yields nothing.
        """
        featured = []
        for campground in self.campground_repo.find_many(max(limit, 0)):
            if not campground.images:
                placeholder = Image(url=DEFAULT_IMAGE_URL, filename=DEFAULT_IMAGE_FILENAME)
                campground = campground.model_copy(update={"images": [placeholder]})
            featured.append(campground)
        return featured

    def count(self) -> int:
        return self.campground_repo.count()
