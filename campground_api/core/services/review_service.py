# campground_api/core/services/review_service.py
from typing import Optional

import structlog

from campground_api.core.domain.exceptions import ReviewAttachError
from campground_api.core.domain.models import Review, ReviewFields
from campground_api.core.ports.campground_repository import ICampgroundRepository
from campground_api.core.ports.review_repository import IReviewRepository
from campground_api.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class ReviewService:
    """
    Use cases for reviews. Keeps each campground's `review_ids` in step
    with the reviews actually attached to it.
    """

    def __init__(
        self,
        review_repo: IReviewRepository,
        campground_repo: ICampgroundRepository,
    ):
        self.review_repo = review_repo
        self.campground_repo = campground_repo

    def create(self, campground_id: str, fields: ReviewFields, author_id: str) -> Optional[Review]:
        """
        Creates a review and appends it to the campground.

        Returns None, creating nothing, when the campground does not exist.
        If the append fails the new review is removed again and the failure
        is raised.
        """
        with tracer.start_as_current_span("review_service.create") as span:
            campground = self.campground_repo.find_by_id(campground_id)
            if campground is None:
                return None

            review = self.review_repo.create(
                body=fields.body,
                rating=fields.rating,
                author_id=author_id,
                campground_id=campground.id,
            )
            span.set_attribute("app.review_id", review.id)

            try:
                attached = self.campground_repo.append_review(campground.id, review.id)
            except Exception:
                logger.error(
                    "review_attach_failed",
                    campground_id=campground.id,
                    review_id=review.id,
                    exc_info=True,
                )
                self._discard(review.id)
                raise

            if attached is None:
                logger.error(
                    "review_attach_failed",
                    campground_id=campground.id,
                    review_id=review.id,
                    reason="campground_missing",
                )
                self._discard(review.id)
                raise ReviewAttachError(campground.id, review.id)

            logger.info("review_created", campground_id=campground.id, review_id=review.id)
            return review

    def delete(self, campground_id: str, review_id: str) -> bool:
        """
        Pulls the review from the campground (a no-op if the campground is
        missing or does not reference it) and deletes the review.
        Returns True iff the review existed.
        """
        review = self.review_repo.find_by_id(review_id)
        target_id = review.id if review is not None else review_id

        parent = self.campground_repo.pull_review(campground_id, target_id)

        # Keep the real parent consistent when the path names another campground.
        if review is not None and review.campground_id:
            if parent is None or parent.id != review.campground_id:
                self.campground_repo.pull_review(review.campground_id, review.id)

        deleted = self.review_repo.delete(target_id)
        if deleted:
            logger.info("review_deleted", campground_id=campground_id, review_id=target_id)
        return deleted

    def get_by_id(self, review_id: str) -> Optional[Review]:
        return self.review_repo.find_by_id(review_id)

    def count(self) -> int:
        return self.review_repo.count()

    def _discard(self, review_id: str) -> None:
        try:
            self.review_repo.delete(review_id)
        except Exception:
            logger.error("review_compensation_failed", review_id=review_id, exc_info=True)
