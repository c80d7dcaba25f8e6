# tests/test_authorization.py
import pytest

from campground_api.adapters.api.authorization import ensure_owner
from campground_api.core.domain.exceptions import ForbiddenError, NotFoundError
from campground_api.core.domain.models import Review, User

OWNER = User(id="u1", email="o@x.com", username="owner")
OTHER = User(id="u2", email="x@x.com", username="other")


@pytest.fixture
def review():
    return Review(id="r1", body="ok", rating=4, author_id="u1", campground_id="c1")


def test_owner_gets_the_resource(review):
    assert ensure_owner(review, OWNER, "Review not found") is review


def test_missing_resource_wins_over_missing_user():
    with pytest.raises(NotFoundError) as excinfo:
        ensure_owner(None, None, "Review not found")
    assert excinfo.value.message == "Review not found"


def test_other_user_is_forbidden(review):
    with pytest.raises(ForbiddenError):
        ensure_owner(review, OTHER, "Review not found")


def test_no_user_is_forbidden(review):
    with pytest.raises(ForbiddenError):
        ensure_owner(review, None, "Review not found")
