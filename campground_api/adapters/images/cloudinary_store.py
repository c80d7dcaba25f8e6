# campground_api/adapters/images/cloudinary_store.py
import io
from typing import Any, Dict, Optional

import cloudinary.uploader
import structlog
from cloudinary.exceptions import Error as CloudinaryError

from campground_api.core.domain.exceptions import ConfigurationError
from campground_api.core.domain.models import Image

logger = structlog.get_logger()


class CloudinaryImageStore:
    """
    Driven Adapter: hosted image storage on Cloudinary through the official SDK.
    The returned `filename` is the Cloudinary public_id.

    Credentials travel with every call; the global `cloudinary.config()` is
    never touched.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: str = "YelpCamp",
        timeout: float = 10.0,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout

    def _options(self, **extra: Any) -> Dict[str, Any]:
        if not self.health_check():
            raise ConfigurationError("Cloudinary credentials are not configured")
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
            **extra,
        }

    def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> Image:
        options = self._options(folder=self.folder, filename=filename, resource_type="image")

        result = cloudinary.uploader.upload(io.BytesIO(content), **options)

        logger.info("image_uploaded", backend="cloudinary", public_id=result.get("public_id"))
        return Image(url=result["secure_url"], filename=result["public_id"])

    def delete(self, filename: str) -> None:
        options = self._options()
        try:
            result = cloudinary.uploader.destroy(filename, **options)
        except CloudinaryError as e:
            # The campground record is already updated; a stale hosted file is tolerable.
            logger.warning("image_delete_failed", backend="cloudinary", public_id=filename, error=str(e))
            return

        if result.get("result") != "ok":
            logger.info("image_delete_noop", backend="cloudinary", public_id=filename, result=result.get("result"))
            return
        logger.info("image_deleted", backend="cloudinary", public_id=filename)

    def health_check(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def close(self) -> None:
        """The SDK keeps no per-store connection; nothing to release."""
