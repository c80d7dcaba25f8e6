# tests/core/test_domain_models.py
import pytest
from pydantic import ValidationError

from campground_api.core.domain.exceptions import (
    DomainError,
    DuplicateUserError,
    ForbiddenError,
    NotFoundError,
    ReviewAttachError,
    UnauthenticatedError,
    UpstreamFailureError,
    ValidationFailedError,
)
from campground_api.core.domain.models import (
    Campground,
    CampgroundChanges,
    Geometry,
    Image,
)


class TestValueObjects:
    def test_geometry_defaults_to_point(self):
        geometry = Geometry(coordinates=(-120.0, 39.1))
        assert geometry.type == "Point"
        assert geometry.coordinates == (-120.0, 39.1)

    def test_geometry_rejects_other_types(self):
        with pytest.raises(ValidationError):
            Geometry(type="Polygon", coordinates=(0.0, 0.0))

    def test_value_objects_are_frozen(self):
        """Images and geometries are immutable once built."""
        image = Image(url="https://x/upload/a.jpg", filename="a")
        with pytest.raises(ValidationError):
            image.filename = "b"

        geometry = Geometry(coordinates=(1.0, 2.0))
        with pytest.raises(ValidationError):
            geometry.coordinates = (3.0, 4.0)


class TestCampgroundModel:
    def test_collections_default_empty(self):
        campground = Campground(
            id="c1",
            title="T",
            description="D",
            location="L",
            geometry=Geometry(coordinates=(1.0, 2.0)),
            price=10,
            author_id="u1",
        )
        assert campground.images == []
        assert campground.review_ids == []
        assert campground.reviews == []
        assert campground.author is None

    def test_changes_are_all_optional(self):
        changes = CampgroundChanges(title="New")
        assert changes.title == "New"
        assert changes.location is None
        assert changes.geometry is None


class TestExceptions:
    @pytest.mark.parametrize(
        "exc, status",
        [
            (NotFoundError(), 404),
            (UnauthenticatedError(), 401),
            (ForbiddenError(), 403),
            (ValidationFailedError(["x"]), 400),
            (DuplicateUserError("email"), 400),
            (UpstreamFailureError("Could not geocode location"), 400),
            (ReviewAttachError("c1", "r1"), 500),
        ],
    )
    def test_status_codes(self, exc, status):
        assert isinstance(exc, DomainError)
        assert exc.status_code == status

    def test_validation_error_joins_messages(self):
        exc = ValidationFailedError(["Title is required", "Price must be at least 0"])
        assert exc.message == "Title is required, Price must be at least 0"
        assert exc.messages == ["Title is required", "Price must be at least 0"]

    def test_duplicate_user_message_names_field(self):
        assert "email" in DuplicateUserError("email").message
