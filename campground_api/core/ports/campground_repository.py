# campground_api/core/ports/campground_repository.py
from typing import List, Optional, Protocol, Sequence

from campground_api.core.domain.models import Campground, CampgroundChanges, Geometry, Image


class ICampgroundRepository(Protocol):
    """
    Port for campground persistence.
    Implementations return domain entities with `author` resolved; any id
    that cannot be parsed is treated as absent.
    """

    def find_all(self) -> List[Campground]:
        """Every campground in storage order."""
        ...

    def find_by_id(self, campground_id: str) -> Optional[Campground]:
        ...

    def find_by_id_with_relations(self, campground_id: str) -> Optional[Campground]:
        """
        Like `find_by_id`, but also fills `reviews` (in `review_ids` order)
        with each review's author resolved.
        """
        ...

    def find_many(self, limit: int) -> List[Campground]:
        """Up to `limit` campgrounds in storage order."""
        ...

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
        """Persists a new campground with an empty review list."""
        ...

    def update(self, campground_id: str, changes: CampgroundChanges) -> Optional[Campground]:
        """Applies the fields set on `changes`. Returns None if the id does not resolve."""
        ...

    def add_images(self, campground_id: str, images: Sequence[Image]) -> Optional[Campground]:
        ...

    def remove_images(self, campground_id: str, filenames: Sequence[str]) -> Optional[Campground]:
        ...

    def append_review(self, campground_id: str, review_id: str) -> Optional[Campground]:
        """Appends `review_id` to `review_ids`. Returns None if the campground is gone."""
        ...

    def pull_review(self, campground_id: str, review_id: str) -> Optional[Campground]:
        """Removes `review_id` from `review_ids`; a no-op if it is not referenced."""
        ...

    def delete(self, campground_id: str) -> bool:
        """True iff a record existed and was removed."""
        ...

    def count(self) -> int:
        ...
