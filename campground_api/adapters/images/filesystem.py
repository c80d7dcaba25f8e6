# campground_api/adapters/images/filesystem.py
import re
import uuid
from pathlib import Path
from typing import Optional

import structlog

from campground_api.core.domain.models import Image

logger = structlog.get_logger()

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class FileSystemImageStore:
    """
    Concrete image store writing uploads to a local directory.
    The app serves that directory under `url_prefix`.
    """

    def __init__(self, base_path: str, url_prefix: str = "/uploads"):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    def _safe_name(self, filename: str) -> str:
        stem = _UNSAFE_CHARS.sub("-", Path(filename or "upload").name).strip("-.") or "upload"
        return f"{uuid.uuid4().hex}-{stem}"

    def _path_for(self, filename: str) -> Optional[Path]:
        # Stored names are flat; anything with a directory part is not ours.
        if not filename or Path(filename).name != filename:
            return None
        return self.base_path / filename

    def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> Image:
        stored = self._safe_name(filename)
        (self.base_path / stored).write_bytes(content)
        logger.info("image_uploaded", backend="filesystem", filename=stored, size=len(content))
        return Image(url=f"{self.url_prefix}/{stored}", filename=stored)

    def delete(self, filename: str) -> None:
        path = self._path_for(filename)
        if path is None:
            logger.warning("image_delete_skipped", backend="filesystem", filename=filename)
            return
        path.unlink(missing_ok=True)
        logger.info("image_deleted", backend="filesystem", filename=filename)

    def health_check(self) -> bool:
        return self.base_path.is_dir()

    def close(self) -> None:
        """Plain files; nothing to release."""
