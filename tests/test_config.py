# tests/test_config.py
import pytest
from pydantic import ValidationError

from tests.conftest import make_settings


def test_featured_limit_must_not_be_negative(tmp_path):
    with pytest.raises(ValidationError):
        make_settings(tmp_path, FEATURED_LIMIT=-1)


def test_featured_limit_zero_is_allowed(tmp_path):
    assert make_settings(tmp_path, FEATURED_LIMIT=0).FEATURED_LIMIT == 0


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("*", ["*"]),
        ("", ["*"]),
        ("https://a.example, https://b.example", ["https://a.example", "https://b.example"]),
    ],
)
def test_cors_origins(tmp_path, raw, expected):
    assert make_settings(tmp_path, CORS_ORIGIN=raw).cors_origins == expected
