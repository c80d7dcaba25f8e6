# tests/http_api/test_campground_routes.py
import uuid

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from tests.conftest import CLOUD_URL
from tests.helpers import campground_body, create_campground, login, register


def _form(**fields):
    """Form-encoded version of campground_body()."""
    return {f"campground[{k}]": str(v) for k, v in campground_body(**fields)["campground"].items()}


class TestListAndShow:
    def test_index_is_public(self, client):
        register(client)
        create_campground(client, title="First")
        create_campground(client, title="Second")
        client.cookies.clear()

        response = client.get("/campgrounds")

        assert response.status_code == 200
        assert [c["title"] for c in response.json()] == ["First", "Second"]

    def test_show_populates_author_and_reviews(self, client):
        register(client, username="alice")
        created = create_campground(client)
        client.post(
            f"/campgrounds/{created['id']}/reviews",
            json={"review": {"rating": 5, "body": "Great"}},
        )

        body = client.get(f"/campgrounds/{created['id']}").json()

        assert body["author"]["username"] == "alice"
        assert body["geometry"] == {"type": "Point", "coordinates": [1.0, 2.0]}
        assert len(body["reviewIds"]) == 1
        assert body["reviews"][0]["body"] == "Great"
        assert body["reviews"][0]["author"]["username"] == "alice"

    def test_show_unknown_id(self, client):
        response = client.get(f"/campgrounds/{uuid.uuid4().hex}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Campground not found"}

    def test_show_malformed_id_is_not_found(self, client):
        response = client.get("/campgrounds/not-a-real-id")

        assert response.status_code == 404
        assert response.json()["message"] == "Campground not found"


class TestCreate:
    def test_requires_sign_in(self, client, mock_geocoder):
        response = client.post("/campgrounds", json=campground_body())

        assert response.status_code == 401
        assert response.json()["success"] is False
        mock_geocoder.forward_geocode.assert_not_called()

    def test_create_json(self, client, mock_geocoder):
        user = register(client)

        response = client.post("/campgrounds", json=campground_body(price="19.5"))

        assert response.status_code == 201
        body = response.json()
        assert body["authorId"] == user["id"]
        assert body["price"] == 19.5
        assert body["images"] == []
        assert body["reviewIds"] == []
        mock_geocoder.forward_geocode.assert_called_once_with("Lake Tahoe, CA")

    def test_create_multipart_with_images(self, client, mock_image_store):
        register(client)

        response = client.post(
            "/campgrounds",
            data=_form(),
            files=[
                ("images", ("tent.jpg", b"jpeg-1", "image/jpeg")),
                ("images", ("lake.png", b"png-2", "image/png")),
            ],
        )

        assert response.status_code == 201, response.text
        images = response.json()["images"]
        assert [img["filename"] for img in images] == ["YelpCamp/tent.jpg", "YelpCamp/lake.png"]
        assert images[0]["url"] == f"{CLOUD_URL}/YelpCamp/tent.jpg"
        assert images[0]["thumbnail"] == (
            "https://res.cloudinary.com/demo/image/upload/w_200,h_200,c_fill,q_auto:low/YelpCamp/tent.jpg"
        )
        assert mock_image_store.upload.call_count == 2

    def test_validation_failure_lists_messages(self, client, mock_geocoder):
        register(client)

        response = client.post("/campgrounds", json=campground_body(title="", price=-1))

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Title is required, Price must be at least 0",
        }
        mock_geocoder.forward_geocode.assert_not_called()

    def test_invalid_json(self, client):
        register(client)

        response = client.post(
            "/campgrounds", content=b"{oops", headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be valid JSON"

    def test_ungeocodable_location_uploads_nothing(self, client, mock_geocoder, mock_image_store):
        register(client)
        mock_geocoder.forward_geocode.return_value = None

        response = client.post(
            "/campgrounds",
            data=_form(location="Atlantis"),
            files=[("images", ("tent.jpg", b"jpeg", "image/jpeg"))],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Could not geocode location"
        mock_image_store.upload.assert_not_called()
        assert client.get("/campgrounds").json() == []

    def test_unexpected_failure_is_a_generic_500(self, app, mock_geocoder):
        mock_geocoder.forward_geocode.side_effect = RuntimeError("mapbox exploded")

        with TestClient(app, raise_server_exceptions=False) as client:
            register(client)
            response = client.post("/campgrounds", json=campground_body())

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Something went wrong"}


class TestOwnership:
    def test_edit_view_is_owner_only(self, client):
        register(client, username="alice")
        created = create_campground(client)

        assert client.get(f"/campgrounds/{created['id']}/edit").status_code == 200

        register(client, username="mallory")
        response = client.get(f"/campgrounds/{created['id']}/edit")
        assert response.status_code == 403

    def test_anonymous_update_is_401(self, client):
        register(client)
        created = create_campground(client)
        client.cookies.clear()

        response = client.put(f"/campgrounds/{created['id']}", json=campground_body(title="X"))

        assert response.status_code == 401

    def test_non_owner_cannot_update_or_delete(self, client):
        register(client, username="alice")
        created = create_campground(client)
        register(client, username="mallory")

        assert client.put(f"/campgrounds/{created['id']}", json=campground_body(title="X")).status_code == 403
        assert client.delete(f"/campgrounds/{created['id']}").status_code == 403
        assert client.get(f"/campgrounds/{created['id']}").json()["title"] == "Lakeside Retreat"

    def test_missing_campground_is_404_before_403(self, client):
        register(client)

        response = client.delete(f"/campgrounds/{uuid.uuid4().hex}")

        assert response.status_code == 404
        assert response.json()["message"] == "Campground not found"

    def test_ownership_checked_before_validation(self, client):
        register(client, username="alice")
        created = create_campground(client)
        register(client, username="mallory")

        response = client.put(f"/campgrounds/{created['id']}", json={"campground": {}})

        assert response.status_code == 403


class TestUpdate:
    def test_same_location_is_not_geocoded_again(self, client, mock_geocoder):
        register(client)
        created = create_campground(client)
        mock_geocoder.forward_geocode.reset_mock()

        response = client.put(
            f"/campgrounds/{created['id']}", json=campground_body(title="Renamed", price=30)
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["price"] == 30
        mock_geocoder.forward_geocode.assert_not_called()

    def test_new_location_is_geocoded(self, client, mock_geocoder):
        from campground_api.core.domain.models import Geometry

        register(client)
        created = create_campground(client)
        mock_geocoder.forward_geocode.return_value = Geometry(coordinates=(7.0, 8.0))

        response = client.put(
            f"/campgrounds/{created['id']}", json=campground_body(location="Big Sur, CA")
        )

        assert response.status_code == 200
        assert response.json()["geometry"]["coordinates"] == [7.0, 8.0]
        mock_geocoder.forward_geocode.assert_called_with("Big Sur, CA")

    def test_images_are_added_and_only_owned_ones_deleted(self, client, mock_image_store):
        register(client)
        created = client.post(
            "/campgrounds",
            data=_form(),
            files=[("images", ("old.jpg", b"old", "image/jpeg"))],
        ).json()

        response = client.put(
            f"/campgrounds/{created['id']}",
            data={
                **_form(),
                "deleteImages[]": ["YelpCamp/old.jpg", "YelpCamp/someone-elses.jpg"],
            },
            files=[("images", ("new.jpg", b"new", "image/jpeg"))],
        )

        assert response.status_code == 200, response.text
        assert [img["filename"] for img in response.json()["images"]] == ["YelpCamp/new.jpg"]
        mock_image_store.delete.assert_called_once_with("YelpCamp/old.jpg")


class TestDelete:
    def test_delete_removes_campground_and_reviews(self, client):
        register(client)
        created = create_campground(client)
        review = client.post(
            f"/campgrounds/{created['id']}/reviews",
            json={"review": {"rating": 4, "body": "Nice"}},
        ).json()

        response = client.delete(f"/campgrounds/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/campgrounds/{created['id']}").status_code == 404
        assert client.get(f"/reviews/{review['id']}").status_code == 404

    def test_login_then_manage(self, client):
        register(client, username="alice")
        created = create_campground(client)
        client.get("/logout")
        client.cookies.clear()

        login(client, username="alice")

        assert client.delete(f"/campgrounds/{created['id']}").status_code == 204


class TestCommitFailures:
    """A write whose commit fails must answer 500, never a 2xx."""

    def _failing_commit(self, monkeypatch):
        def boom(self):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", boom)

    def test_create_reports_failed_commit(self, app, monkeypatch):
        with TestClient(app, raise_server_exceptions=False) as client:
            register(client)
            self._failing_commit(monkeypatch)

            response = client.post("/campgrounds", json=campground_body())
            monkeypatch.undo()
            listing = client.get("/campgrounds").json()

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Something went wrong"}
        assert listing == []

    def test_delete_reports_failed_commit(self, app, monkeypatch):
        with TestClient(app, raise_server_exceptions=False) as client:
            register(client)
            created = create_campground(client)
            self._failing_commit(monkeypatch)

            response = client.delete(f"/campgrounds/{created['id']}")
            monkeypatch.undo()
            shown = client.get(f"/campgrounds/{created['id']}")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert shown.status_code == 200
