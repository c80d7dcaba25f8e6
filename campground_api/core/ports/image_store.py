# campground_api/core/ports/image_store.py
from typing import Optional, Protocol

from campground_api.core.domain.models import Image


class IImageStore(Protocol):
    """
    Port for hosted image storage.
    """

    def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> Image:
        """
        Stores the bytes and returns the public URL plus the store-generated
        filename used later for deletion.
        """
        ...

    def delete(self, filename: str) -> None:
        """Removes a stored image. Unknown filenames are ignored."""
        ...

    def health_check(self) -> bool:
        """Returns True if the store is configured and usable."""
        ...

    def close(self) -> None:
        """Releases any connection held by the store."""
        ...
