# campground_api/core/ports/review_repository.py
from typing import Optional, Protocol, Sequence

from campground_api.core.domain.models import Review


class IReviewRepository(Protocol):
    """
    Port for review persistence.
    """

    def find_by_id(self, review_id: str) -> Optional[Review]:
        """Returns the review with `author` resolved, or None."""
        ...

    def create(self, *, body: str, rating: int, author_id: str, campground_id: str) -> Review:
        ...

    def delete(self, review_id: str) -> bool:
        """True iff the review existed before deletion."""
        ...

    def delete_many(self, review_ids: Sequence[str]) -> int:
        """Deletes every listed review that exists; returns how many were removed."""
        ...

    def count(self) -> int:
        ...
