# campground_api/adapters/api/routers/campgrounds.py
from typing import List

import structlog
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from campground_api.core.domain.exceptions import NotFoundError, UpstreamFailureError
from campground_api.core.domain.models import (
    Campground,
    CampgroundChanges,
    CampgroundFields,
    Geometry,
    User,
)
from campground_api.core.ports.geocoder import IGeocoder
from campground_api.core.ports.image_store import IImageStore
from campground_api.core.services.campground_service import CampgroundService

from ..authorization import require_campground_owner
from ..dependencies import (
    RequestBody,
    get_campground_service,
    get_db_session,
    get_geocoder,
    get_image_store,
    read_request_body,
    require_user,
    store_uploads,
)
from ..schemas import CampgroundRead
from ..validation import CampgroundPayload, validate_payload

logger = structlog.get_logger()

router = APIRouter(prefix="/campgrounds", tags=["Campgrounds"])


def _geocode(geocoder: IGeocoder, location: str) -> Geometry:
    geometry = geocoder.forward_geocode(location)
    if geometry is None:
        raise UpstreamFailureError("Could not geocode location")
    return geometry


@router.get("", response_model=List[CampgroundRead])
def list_campgrounds(campgrounds: CampgroundService = Depends(get_campground_service)):
    return campgrounds.get_all()


@router.post("", response_model=CampgroundRead, status_code=status.HTTP_201_CREATED)
def create_campground(
    user: User = Depends(require_user),
    body: RequestBody = Depends(read_request_body),
    campgrounds: CampgroundService = Depends(get_campground_service),
    geocoder: IGeocoder = Depends(get_geocoder),
    image_store: IImageStore = Depends(get_image_store),
    session: Session = Depends(get_db_session),
):
    """
    Creates a listing owned by the caller. The location is geocoded before
    any image is uploaded, so a rejected request leaves nothing behind.
    """
    payload = validate_payload(CampgroundPayload, body.data)
    fields = CampgroundFields(**payload.campground.model_dump())

    geometry = _geocode(geocoder, fields.location)
    images = store_uploads(image_store, body.uploads)

    created = campgrounds.create(fields, images, geometry, user.id)
    session.commit()
    return created


@router.get("/{campground_id}", response_model=CampgroundRead)
def show_campground(
    campground_id: str,
    campgrounds: CampgroundService = Depends(get_campground_service),
):
    campground = campgrounds.get_by_id(campground_id)
    if campground is None:
        raise NotFoundError("Campground not found")
    return campground


@router.get("/{campground_id}/edit", response_model=CampgroundRead)
def edit_campground(
    owned: Campground = Depends(require_campground_owner),
    campgrounds: CampgroundService = Depends(get_campground_service),
):
    """The campground as its owner is about to edit it."""
    campground = campgrounds.get_by_id(owned.id)
    if campground is None:
        raise NotFoundError("Campground not found")
    return campground


@router.put("/{campground_id}", response_model=CampgroundRead)
def update_campground(
    existing: Campground = Depends(require_campground_owner),
    body: RequestBody = Depends(read_request_body),
    campgrounds: CampgroundService = Depends(get_campground_service),
    geocoder: IGeocoder = Depends(get_geocoder),
    image_store: IImageStore = Depends(get_image_store),
    session: Session = Depends(get_db_session),
):
    payload = validate_payload(CampgroundPayload, body.data)
    changes = CampgroundChanges(**payload.campground.model_dump())

    # Only a changed address needs a new point.
    if changes.location != existing.location:
        changes = changes.model_copy(update={"geometry": _geocode(geocoder, changes.location)})

    images = store_uploads(image_store, body.uploads)
    updated = campgrounds.update(existing.id, changes, images, payload.delete_images)
    if updated is None:
        raise NotFoundError("Campground not found")
    session.commit()

    owned_files = {img.filename for img in existing.images}
    for filename in payload.delete_images:
        if filename not in owned_files:
            logger.warning("image_delete_not_owned", campground_id=existing.id, filename=filename)
            continue
        image_store.delete(filename)

    return updated


@router.delete("/{campground_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campground(
    existing: Campground = Depends(require_campground_owner),
    campgrounds: CampgroundService = Depends(get_campground_service),
    session: Session = Depends(get_db_session),
):
    campgrounds.delete(existing.id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
