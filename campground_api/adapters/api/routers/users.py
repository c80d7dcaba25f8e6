# campground_api/adapters/api/routers/users.py
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from campground_api.core.domain.exceptions import UnauthenticatedError
from campground_api.core.domain.models import User
from campground_api.core.services.user_service import UserService
from campground_api.shared.config import Settings

from ..dependencies import (
    RequestBody,
    get_current_user,
    get_db_session,
    get_settings,
    get_user_service,
    read_request_body,
)
from ..schemas import MessageResponse, UserRead
from ..sessions import clear_session_cookie, create_session_token, set_session_cookie
from ..validation import LoginInput, RegisterInput, validate_payload

logger = structlog.get_logger()

router = APIRouter(tags=["Users"])


def _start_session(response: Response, user: User, settings: Settings) -> None:
    set_session_cookie(response, create_session_token(user.id, settings), settings)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    response: Response,
    body: RequestBody = Depends(read_request_body),
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_db_session),
):
    """Creates an account and signs it in."""
    payload = validate_payload(RegisterInput, body.data)
    user = users.register(payload.email, payload.username, payload.password)
    session.commit()
    _start_session(response, user, settings)
    return user


@router.post("/login", response_model=UserRead)
def login(
    response: Response,
    body: RequestBody = Depends(read_request_body),
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    payload = validate_payload(LoginInput, body.data)
    user = users.authenticate(payload.username, payload.password)
    if user is None:
        raise UnauthenticatedError("Invalid username or password")
    _start_session(response, user, settings)
    logger.info("user_logged_in", user_id=user.id)
    return user


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return MessageResponse(success=True, message="Goodbye!")


@router.get("/api/user/me", response_model=UserRead)
def current_user(user: Optional[User] = Depends(get_current_user)):
    if user is None:
        raise UnauthenticatedError("Not authenticated")
    return user
