# campground_api/shared/config.py
from enum import Enum
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ImageStorageBackend(str, Enum):
    CLOUDINARY = "cloudinary"
    FILESYSTEM = "filesystem"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic; read once at process startup.
    """

    # --- Application Meta ---
    APP_NAME: str = "campground-api"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False
    PORT: int = 3000

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "campground-api"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Persistence ---
    DATABASE_URL: str = "sqlite:///./campgrounds.db"

    # --- Sessions ---
    SESSION_SECRET: Optional[str] = None
    SESSION_COOKIE_NAME: str = "session"
    SESSION_TTL_DAYS: int = 7

    # --- Geocoding (Mapbox) ---
    MAPBOX_TOKEN: Optional[str] = None
    MAPBOX_GEOCODING_URL: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    HTTP_TIMEOUT_SEC: float = 10.0

    # --- Image Storage ---
    IMAGE_STORAGE_BACKEND: ImageStorageBackend = ImageStorageBackend.FILESYSTEM
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_KEY: Optional[str] = None
    CLOUDINARY_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "YelpCamp"
    UPLOAD_DIR: str = "./uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # --- HTTP ---
    CORS_ORIGIN: str = "*"
    FEATURED_LIMIT: int = Field(3, ge=0)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == AppEnv.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == AppEnv.DEVELOPMENT

    @property
    def cors_origins(self) -> List[str]:
        """Parse the comma-separated CORS_ORIGIN value into a list."""
        raw = (self.CORS_ORIGIN or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    @property
    def session_secret(self) -> str:
        """
        Secret used to sign session tokens.

        Production refuses to run without one; other environments fall back
        to a fixed development value.
        """
        if self.SESSION_SECRET:
            return self.SESSION_SECRET
        if self.is_production:
            raise RuntimeError("SESSION_SECRET environment variable is not set")
        return "insecure-development-secret-change-me"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
