# tests/test_telemetry.py
from unittest.mock import MagicMock

from campground_api import __version__
from campground_api.shared.config import AppEnv
from campground_api.shared.telemetry import build_resource, setup_telemetry, shutdown_telemetry
from tests.conftest import make_settings


def test_resource_identifies_this_service(tmp_path):
    settings = make_settings(tmp_path, APP_ENV=AppEnv.DEVELOPMENT, OTEL_SERVICE_NAME="campgrounds-dev")

    attributes = build_resource(settings).attributes

    assert attributes["service.name"] == "campgrounds-dev"
    assert attributes["service.version"] == __version__
    assert attributes["deployment.environment"] == "development"
    assert attributes["campground.image_backend"] == "filesystem"


def test_disabled_without_endpoint(tmp_path):
    assert setup_telemetry(make_settings(tmp_path)) is None


def test_shutdown_flushes_the_provider():
    provider = MagicMock()

    shutdown_telemetry(provider)
    shutdown_telemetry(None)

    provider.shutdown.assert_called_once_with()
