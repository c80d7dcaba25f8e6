# campground_api/adapters/api/dependencies.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

import structlog
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from campground_api.core.domain.exceptions import UnauthenticatedError, ValidationFailedError
from campground_api.core.domain.models import Image, User
from campground_api.core.ports.geocoder import IGeocoder
from campground_api.core.ports.image_store import IImageStore
from campground_api.core.services.campground_service import CampgroundService
from campground_api.core.services.review_service import ReviewService
from campground_api.core.services.user_service import UserService
from campground_api.shared.config import Settings
from campground_api.shared.container import Container

from .sessions import read_session_token
from .validation import nest_form_fields

logger = structlog.get_logger()

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


# -----------------------------------------------------------------------------
# Container & infrastructure
# -----------------------------------------------------------------------------
def get_container(request: Request) -> Container:
    """The container built by create_app() for this application instance."""
    return request.app.state.container


def get_settings(container: Container = Depends(get_container)) -> Settings:
    return container.settings()


def get_db_session(container: Container = Depends(get_container)) -> Iterator[Session]:
    """
    One session per request. Write routes call `session.commit()` before
    returning, so a failed commit reaches the error handlers instead of
    following a 2xx response. Uncommitted work is rolled back on close.
    """
    session = container.session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_geocoder(container: Container = Depends(get_container)) -> IGeocoder:
    return container.geocoder()


def get_image_store(container: Container = Depends(get_container)) -> IImageStore:
    return container.image_store()


# -----------------------------------------------------------------------------
# Services (request-scoped, bound to the request session)
# -----------------------------------------------------------------------------
def get_campground_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db_session),
) -> CampgroundService:
    return container.campground_service(
        campground_repo__session=session,
        review_repo__session=session,
    )


def get_review_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db_session),
) -> ReviewService:
    return container.review_service(
        review_repo__session=session,
        campground_repo__session=session,
    )


def get_user_service(
    container: Container = Depends(get_container),
    session: Session = Depends(get_db_session),
) -> UserService:
    return container.user_service(user_repo__session=session)


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------
def _presented_token(request: Request, settings: Settings) -> Optional[str]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token

    auth = request.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserService = Depends(get_user_service),
) -> Optional[User]:
    """The signed-in user, or None. Never raises for a bad or stale token."""
    token = _presented_token(request, settings)
    if not token:
        return None

    user_id = read_session_token(token, settings)
    if user_id is None:
        return None

    user = users.get_by_id(user_id)
    if user is not None:
        structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    """401 unless a valid session is present."""
    if user is None:
        raise UnauthenticatedError()
    return user


# -----------------------------------------------------------------------------
# Request bodies (JSON or form, with optional image files)
# -----------------------------------------------------------------------------
@dataclass
class Upload:
    filename: str
    content: bytes
    content_type: Optional[str] = None


@dataclass
class RequestBody:
    data: Any = None
    uploads: List[Upload] = field(default_factory=list)


async def read_request_body(request: Request) -> RequestBody:
    """
    Reads a JSON body, or a form body whose bracketed keys
    (`campground[title]`, `deleteImages[]`) are rebuilt into the same
    nested shape. Files sent under `images` are collected as uploads.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields = []
        uploads: List[Upload] = []
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == "images" and value.filename:
                    uploads.append(Upload(value.filename, await value.read(), value.content_type))
                continue
            fields.append((key, value))
        return RequestBody(data=nest_form_fields(fields), uploads=uploads)

    raw = await request.body()
    if not raw.strip():
        return RequestBody(data={})
    try:
        return RequestBody(data=json.loads(raw))
    except ValueError as e:
        raise ValidationFailedError(["Request body must be valid JSON"]) from e


def store_uploads(image_store: IImageStore, uploads: List[Upload]) -> List[Image]:
    """Push every upload to the image store, in order."""
    return [image_store.upload(u.filename, u.content, u.content_type) for u in uploads]
