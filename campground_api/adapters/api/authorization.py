# campground_api/adapters/api/authorization.py
"""
Ownership guards.

Each guard resolves the resource named in the path, then compares its
`author_id` with the signed-in user:

    missing resource       -> NotFoundError   (404)
    no user / other author -> ForbiddenError  (403)
    owner                  -> resource is handed to the route

Guards depend on `require_user`, so an anonymous caller gets 401 before
ownership is evaluated.
"""
from typing import Optional, Protocol, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Session

from campground_api.core.domain.exceptions import ForbiddenError, NotFoundError
from campground_api.core.domain.models import Campground, Review, User
from campground_api.shared.container import Container

from .dependencies import get_container, get_db_session, require_user


class Owned(Protocol):
    author_id: str


R = TypeVar("R", bound=Owned)


def ensure_owner(resource: Optional[R], user: Optional[User], not_found: str) -> R:
    if resource is None:
        raise NotFoundError(not_found)
    if user is None or resource.author_id != user.id:
        raise ForbiddenError()
    return resource


def require_campground_owner(
    campground_id: str,
    user: User = Depends(require_user),
    container: Container = Depends(get_container),
    session: Session = Depends(get_db_session),
) -> Campground:
    campground = container.campground_repo(session=session).find_by_id(campground_id)
    return ensure_owner(campground, user, "Campground not found")


def require_review_owner(
    review_id: str,
    user: User = Depends(require_user),
    container: Container = Depends(get_container),
    session: Session = Depends(get_db_session),
) -> Review:
    review = container.review_repo(session=session).find_by_id(review_id)
    return ensure_owner(review, user, "Review not found")
