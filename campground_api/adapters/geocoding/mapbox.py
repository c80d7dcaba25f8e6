# campground_api/adapters/geocoding/mapbox.py
from typing import Optional
from urllib.parse import quote

import httpx
import structlog

from campground_api.core.domain.exceptions import ConfigurationError
from campground_api.core.domain.models import Geometry
from campground_api.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class MapboxGeocoder:
    """
    Driven Adapter: forward geocoding through the Mapbox Places API.

    One request per call, no retries. An empty feature list is a normal
    "no result" (None); HTTP and transport failures propagate.
    """

    def __init__(
        self,
        token: Optional[str],
        base_url: str = "https://api.mapbox.com/geocoding/v5/mapbox.places",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def forward_geocode(self, query: str) -> Optional[Geometry]:
        if not self.token:
            raise ConfigurationError("MAPBOX_TOKEN is not configured")

        with tracer.start_as_current_span("mapbox.forward_geocode") as span:
            span.set_attribute("geocode.query_length", len(query))

            response = self.client.get(
                f"{self.base_url}/{quote(query, safe='')}.json",
                params={"access_token": self.token, "limit": 1},
            )
            response.raise_for_status()

            features = response.json().get("features") or []
            if not features:
                logger.info("geocode_no_result", query=query)
                return None

            geometry = features[0].get("geometry") or {}
            coordinates = geometry.get("coordinates") or []
            if len(coordinates) < 2:
                logger.warning("geocode_malformed_feature", query=query)
                return None

            return Geometry(type="Point", coordinates=(coordinates[0], coordinates[1]))

    def health_check(self) -> bool:
        return bool(self.token)

    def close(self) -> None:
        self.client.close()
