# tests/conftest.py
import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from campground_api.adapters.persistence.database import init_db
from campground_api.core.domain.models import Geometry, Image
from campground_api.core.ports.geocoder import IGeocoder
from campground_api.core.ports.image_store import IImageStore
from campground_api.main import create_app
from campground_api.shared.config import AppEnv, ImageStorageBackend, Settings
from campground_api.shared.container import Container

CLOUD_URL = "https://res.cloudinary.com/demo/image/upload"


def make_settings(tmp_path, **overrides) -> Settings:
    """Isolated settings: in-memory SQLite, no .env file, no telemetry."""
    values = dict(
        APP_ENV=AppEnv.TESTING,
        DATABASE_URL="sqlite://",
        SESSION_SECRET="test-session-secret",
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
        MAPBOX_TOKEN="test-mapbox-token",
        OTEL_EXPORTER_OTLP_ENDPOINT=None,
        IMAGE_STORAGE_BACKEND=ImageStorageBackend.FILESYSTEM,
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="function")
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture(scope="function")
def mock_geocoder():
    """Returns a mock Geocoder that always finds the point (1, 2)."""
    geocoder = MagicMock(spec=IGeocoder)
    geocoder.forward_geocode.return_value = Geometry(type="Point", coordinates=(1.0, 2.0))
    geocoder.health_check.return_value = True
    return geocoder


@pytest.fixture(scope="function")
def mock_image_store():
    """Returns a mock Image Store that 'hosts' uploads under a Cloudinary-style URL."""
    store = MagicMock(spec=IImageStore)

    def _upload(filename, content, content_type=None):
        public_id = f"YelpCamp/{filename}"
        return Image(url=f"{CLOUD_URL}/{public_id}", filename=public_id)

    store.upload.side_effect = _upload
    store.health_check.return_value = True
    return store


@pytest.fixture(scope="function")
def container(settings, mock_geocoder, mock_image_store):
    """
    Sets up the Dependency Injection Container for testing.
    Settings point at a fresh in-memory database; the outbound adapters
    (geocoder, image store) are replaced with the mocks above.
    """
    container = Container()
    container.settings.override(settings)
    container.geocoder.override(mock_geocoder)
    container.image_store.override(mock_image_store)

    init_db(container.engine())

    yield container

    container.engine().dispose()
    container.reset_override()


@pytest.fixture
def session(container):
    """A SQLAlchemy session on the test database, closed after the test."""
    db = container.session_factory()()
    yield db
    db.close()


@pytest.fixture
def campground_service(container, session):
    return container.campground_service(
        campground_repo__session=session,
        review_repo__session=session,
    )


@pytest.fixture
def review_service(container, session):
    return container.review_service(
        review_repo__session=session,
        campground_repo__session=session,
    )


@pytest.fixture
def user_service(container, session):
    return container.user_service(user_repo__session=session)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    """
    Returns a FastAPI TestClient. Entering the context runs the lifespan
    (table creation) before the first request.
    """
    with TestClient(app) as c:
        yield c
