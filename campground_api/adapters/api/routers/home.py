# campground_api/adapters/api/routers/home.py
import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError

from campground_api.adapters.persistence.database import ping
from campground_api.core.services.campground_service import CampgroundService
from campground_api.core.services.review_service import ReviewService
from campground_api.core.services.user_service import UserService
from campground_api.shared.config import Settings
from campground_api.shared.container import Container

from ..dependencies import (
    get_campground_service,
    get_container,
    get_review_service,
    get_settings,
    get_user_service,
)
from ..schemas import CampgroundRead, HealthResponse, HomeResponse, Stats

logger = structlog.get_logger()

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    container: Container = Depends(get_container),
    settings: Settings = Depends(get_settings),
):
    """
    Liveness check. Always 200; the database field reports whether
    `SELECT 1` succeeded.
    """
    try:
        database = "connected" if ping(container.engine()) else "disconnected"
    except SQLAlchemyError as e:
        logger.warning("health_db_unreachable", error=str(e))
        database = "disconnected"

    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        environment=settings.APP_ENV.value,
        database=database,
    )


@router.get("/", response_model=HomeResponse)
def home(
    settings: Settings = Depends(get_settings),
    campgrounds: CampgroundService = Depends(get_campground_service),
    reviews: ReviewService = Depends(get_review_service),
    users: UserService = Depends(get_user_service),
):
    """Featured listings and site totals. Degrades to an empty page instead of failing."""
    try:
        return HomeResponse(
            featured_campgrounds=[
                CampgroundRead.model_validate(c)
                for c in campgrounds.get_featured(settings.FEATURED_LIMIT)
            ],
            stats=Stats(
                campgrounds=campgrounds.count(),
                reviews=reviews.count(),
                users=users.count(),
            ),
        )
    except Exception:
        logger.exception("home_page_failed")
        return HomeResponse(featured_campgrounds=[], stats=Stats())
