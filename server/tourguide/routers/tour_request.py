"""Tour request router: booking requests and their lifecycle."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import CURRENT_USER_DEPENDENCY
from ..core.exceptions import InternalServerError
from ..models.tour_request import TourRequestStatus
from ..schemas.auth import AuthenticatedUser
from ..schemas.common import Envelope
from ..schemas.tour_request import (
    CreateTourRequestRequest,
    TourRequest,
    UpdateTourRequestStatusRequest,
)
from ..services.tour_request_service import TourRequestService, tour_request_to_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tour-requests", tags=["tour-requests"])

DB_DEPENDENCY = Depends(get_db)


@router.post("", response_model=Envelope[TourRequest], status_code=201)
async def create_tour_request(
    request: CreateTourRequestRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """
    Request a booking for a tour.

    The request starts pending and the tour's guide is notified. When
    ``total_price`` is omitted it is quoted from the tour's pricing.
    """
    try:
        tour_request = await TourRequestService(db).create_request(request, current_user)
    except SQLAlchemyError as e:
        logger.error(
            "Database error creating tour request",
            extra={"tour_id": request.tour_id, "tourist_id": current_user.user_id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(str(e))

    response_data = Envelope[TourRequest](
        message="Tour request created successfully",
        data=tour_request_to_schema(tour_request),
    )
    return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))


@router.get("/my-requests", response_model=list[TourRequest])
async def my_requests(
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> list[TourRequest]:
    """Requests made by a tourist, or received by a guide, newest first."""
    try:
        requests = await TourRequestService(db).list_for_user(current_user)
    except SQLAlchemyError as e:
        logger.error("Database error listing tour requests", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return [tour_request_to_schema(tour_request) for tour_request in requests]


@router.patch("/{request_id}/status", response_model=Envelope[TourRequest])
async def update_tour_request_status(
    request_id: int,
    request: UpdateTourRequestStatusRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Approve or reject a request; the tourist is notified."""
    try:
        tour_request = await TourRequestService(db).update_status(
            request_id, TourRequestStatus(request.status)
        )
    except SQLAlchemyError as e:
        logger.error(
            "Database error updating tour request status",
            extra={"request_id": request_id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(str(e))

    logger.info(
        "Tour request decided",
        extra={"request_id": request_id, "status": request.status, "decided_by": current_user.user_id}
    )
    response_data = Envelope[TourRequest](
        message="Request status updated successfully",
        data=tour_request_to_schema(tour_request),
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.patch("/{request_id}/cancel", response_model=Envelope[TourRequest])
async def cancel_tour_request(
    request_id: int,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Cancel a request whatever its status; the guide is notified."""
    try:
        tour_request = await TourRequestService(db).cancel(request_id)
    except SQLAlchemyError as e:
        logger.error(
            "Database error cancelling tour request",
            extra={"request_id": request_id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(str(e))

    logger.info(
        "Tour request cancelled",
        extra={"request_id": request_id, "cancelled_by": current_user.user_id}
    )
    response_data = Envelope[TourRequest](
        message="Request cancelled successfully",
        data=tour_request_to_schema(tour_request),
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
