"""Tour router for tour catalogue operations."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import CURRENT_USER_DEPENDENCY
from ..core.exceptions import InternalServerError
from ..schemas.auth import AuthenticatedUser
from ..schemas.common import Envelope
from ..schemas.tour import CreateTourRequest, Tour, TourDetail
from ..services.tour_service import TourService, tour_to_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tours", tags=["tours"])

DB_DEPENDENCY = Depends(get_db)


@router.get("", response_model=list[Tour])
async def list_tours(db: AsyncSession = DB_DEPENDENCY) -> list[Tour]:
    """List every tour with its guide's name, newest first."""
    try:
        tours = await TourService(db).list_tours()
    except SQLAlchemyError as e:
        logger.error("Database error listing tours", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return [tour_to_schema(tour) for tour in tours]


@router.get("/my-tours", response_model=list[Tour])
async def my_tours(
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> list[Tour]:
    """Tours owned by the caller."""
    try:
        tours = await TourService(db).list_tours_by_guide(current_user.user_id)
    except SQLAlchemyError as e:
        logger.error("Database error listing guide tours", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return [tour_to_schema(tour) for tour in tours]


@router.get("/{tour_id}", response_model=TourDetail)
async def get_tour(tour_id: int, db: AsyncSession = DB_DEPENDENCY) -> TourDetail:
    """Tour detail with its review summary."""
    try:
        return await TourService(db).get_tour_detail(tour_id)
    except SQLAlchemyError as e:
        logger.error("Database error reading tour", extra={"tour_id": tour_id, "error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))


@router.post("", response_model=Envelope[Tour], status_code=201)
async def create_tour(
    request: CreateTourRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """
    Create a new tour.

    Only guides may create tours; the caller becomes the owner.
    """
    try:
        tour = await TourService(db).create_tour(request, current_user)
    except SQLAlchemyError as e:
        logger.error(
            "Database error in tour creation",
            extra={"guide_id": current_user.user_id, "title": request.title, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(str(e))

    response_data = Envelope[Tour](message="Tour created successfully", data=tour_to_schema(tour))
    return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))
