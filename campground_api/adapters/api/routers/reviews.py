# campground_api/adapters/api/routers/reviews.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from campground_api.core.domain.exceptions import NotFoundError
from campground_api.core.domain.models import Review, ReviewFields, User
from campground_api.core.services.review_service import ReviewService

from ..authorization import require_review_owner
from ..dependencies import (
    RequestBody,
    get_db_session,
    get_review_service,
    read_request_body,
    require_user,
)
from ..schemas import ReviewRead
from ..validation import ReviewPayload, validate_payload

router = APIRouter(tags=["Reviews"])


@router.post(
    "/campgrounds/{campground_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
)
def create_review(
    campground_id: str,
    user: User = Depends(require_user),
    body: RequestBody = Depends(read_request_body),
    reviews: ReviewService = Depends(get_review_service),
    session: Session = Depends(get_db_session),
):
    payload = validate_payload(ReviewPayload, body.data)
    review = reviews.create(campground_id, ReviewFields(**payload.review.model_dump()), user.id)
    if review is None:
        raise NotFoundError("Campground not found")
    session.commit()
    return review


@router.delete(
    "/campgrounds/{campground_id}/reviews/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_review(
    campground_id: str,
    review: Review = Depends(require_review_owner),
    reviews: ReviewService = Depends(get_review_service),
    session: Session = Depends(get_db_session),
):
    reviews.delete(campground_id, review.id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reviews/{review_id}", response_model=ReviewRead)
def show_review(review_id: str, reviews: ReviewService = Depends(get_review_service)):
    review = reviews.get_by_id(review_id)
    if review is None:
        raise NotFoundError("Review not found")
    return review
