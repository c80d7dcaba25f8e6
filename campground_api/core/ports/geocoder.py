# campground_api/core/ports/geocoder.py
from typing import Optional, Protocol

from campground_api.core.domain.models import Geometry


class IGeocoder(Protocol):
    """
    Port for forward geocoding (free-text address -> point).
    """

    def forward_geocode(self, query: str) -> Optional[Geometry]:
        """
        Returns the best matching point, or None when the provider has no result.
        Transport and configuration failures are raised.
        """
        ...

    def health_check(self) -> bool:
        """Returns True if the provider is configured."""
        ...

    def close(self) -> None:
        """Releases the underlying HTTP client."""
        ...
