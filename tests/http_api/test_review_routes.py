# tests/http_api/test_review_routes.py
import uuid

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from tests.helpers import create_campground, login, register


def _review(rating=4, body="Lovely spot"):
    return {"review": {"rating": rating, "body": body}}


def _post_review(client, campground_id, **kwargs):
    return client.post(f"/campgrounds/{campground_id}/reviews", json=_review(**kwargs))


def test_create_review(client):
    user = register(client)
    campground = create_campground(client)

    response = _post_review(client, campground["id"], rating="5")

    assert response.status_code == 201
    body = response.json()
    assert body["rating"] == 5
    assert body["authorId"] == user["id"]
    assert body["campgroundId"] == campground["id"]
    assert client.get(f"/campgrounds/{campground['id']}").json()["reviewIds"] == [body["id"]]


def test_create_review_requires_sign_in(client):
    register(client)
    campground = create_campground(client)
    client.cookies.clear()

    response = _post_review(client, campground["id"])

    assert response.status_code == 401


def test_create_review_on_missing_campground(client):
    register(client)

    response = _post_review(client, uuid.uuid4().hex)

    assert response.status_code == 404
    assert response.json()["message"] == "Campground not found"


def test_rating_out_of_range(client):
    register(client)
    campground = create_campground(client)

    response = _post_review(client, campground["id"], rating=6)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Rating must be at most 5"}
    assert client.get(f"/campgrounds/{campground['id']}").json()["reviewIds"] == []


def test_review_form_body(client):
    register(client)
    campground = create_campground(client)

    response = client.post(
        f"/campgrounds/{campground['id']}/reviews",
        data={"review[rating]": "3", "review[body]": "Windy"},
    )

    assert response.status_code == 201
    assert response.json()["rating"] == 3


def test_show_review(client):
    register(client, username="alice")
    campground = create_campground(client)
    review = _post_review(client, campground["id"]).json()

    response = client.get(f"/reviews/{review['id']}")

    assert response.status_code == 200
    assert response.json()["author"]["username"] == "alice"


def test_show_missing_review(client):
    response = client.get("/reviews/garbage")

    assert response.status_code == 404
    assert response.json()["message"] == "Review not found"


def test_author_deletes_review(client):
    register(client)
    campground = create_campground(client)
    review = _post_review(client, campground["id"]).json()

    response = client.delete(f"/campgrounds/{campground['id']}/reviews/{review['id']}")

    assert response.status_code == 204
    assert client.get(f"/campgrounds/{campground['id']}").json()["reviewIds"] == []
    assert client.get(f"/reviews/{review['id']}").status_code == 404


def test_campground_owner_cannot_delete_someone_elses_review(client):
    register(client, username="owner")
    campground = create_campground(client)
    register(client, username="visitor")
    review = _post_review(client, campground["id"]).json()
    client.cookies.clear()
    login(client, username="owner")

    response = client.delete(f"/campgrounds/{campground['id']}/reviews/{review['id']}")

    assert response.status_code == 403
    assert client.get(f"/reviews/{review['id']}").status_code == 200


def test_delete_missing_review(client):
    register(client)
    campground = create_campground(client)

    response = client.delete(f"/campgrounds/{campground['id']}/reviews/{uuid.uuid4().hex}")

    assert response.status_code == 404
    assert response.json()["message"] == "Review not found"


def test_failed_commit_leaves_no_review(app, monkeypatch):
    def boom(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    with TestClient(app, raise_server_exceptions=False) as client:
        register(client)
        campground = create_campground(client)
        monkeypatch.setattr(Session, "commit", boom)

        response = _post_review(client, campground["id"])
        monkeypatch.undo()
        review_ids = client.get(f"/campgrounds/{campground['id']}").json()["reviewIds"]

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Something went wrong"}
    assert review_ids == []
