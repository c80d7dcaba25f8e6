# tests/helpers.py
"""HTTP helpers shared by the endpoint tests."""


def register(client, username="alice", email=None, password="s3cret-pass"):
    """Registers (and thereby signs in) a user; returns the user JSON."""
    response = client.post(
        "/register",
        json={"email": email or f"{username}@example.com", "username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def login(client, username="alice", password="s3cret-pass"):
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def campground_body(**fields):
    campground = {
        "title": "Lakeside Retreat",
        "location": "Lake Tahoe, CA",
        "price": 25,
        "description": "Quiet sites by the water.",
    }
    campground.update(fields)
    return {"campground": campground}


def create_campground(client, **fields):
    response = client.post("/campgrounds", json=campground_body(**fields))
    assert response.status_code == 201, response.text
    return response.json()
