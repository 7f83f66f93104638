"""Business directory router."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import CURRENT_USER_DEPENDENCY
from ..core.exceptions import InternalServerError, ValidationError
from ..models.business import BusinessType
from ..schemas.auth import AuthenticatedUser
from ..schemas.business import Business, BusinessFilters, CreateBusinessRequest, UpdateBusinessRequest
from ..schemas.common import Envelope
from ..services.business_service import BusinessService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/businesses", tags=["businesses"])

DB_DEPENDENCY = Depends(get_db)

ALL_TYPES = "all"


def parse_business_type(value: Optional[str]) -> Optional[BusinessType]:
    """Map a type parameter to the enum; ``all`` and empty mean no filter."""
    if not value or value == ALL_TYPES:
        return None
    try:
        return BusinessType(value)
    except ValueError:
        raise ValidationError(f"Invalid business type: {value}", type=value)


def _storage_failure(action: str, error: SQLAlchemyError, **context) -> InternalServerError:
    logger.error(f"Database error {action}", extra={**context, "error": str(error)}, exc_info=True)
    return InternalServerError(str(error))


def _to_list(businesses) -> list[Business]:
    return [Business.model_validate(business) for business in businesses]


@router.get("", response_model=list[Business])
async def list_businesses(
    type: Optional[str] = Query(None, description="restaurant, store, hotel, attraction or all"),
    verified: Optional[bool] = Query(None),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    search: Optional[str] = Query(None, description="Text matched against name, description and address"),
    db: AsyncSession = DB_DEPENDENCY,
) -> list[Business]:
    """
    Query the directory.

    Every given filter must match; results are ordered by rating, highest first.
    """
    filters = BusinessFilters(
        type=parse_business_type(type),
        verified=verified,
        min_rating=min_rating,
        search=search or None,
    )
    try:
        businesses = await BusinessService(db).query(filters)
    except SQLAlchemyError as e:
        raise _storage_failure("querying businesses", e)
    return _to_list(businesses)


@router.get("/search", response_model=list[Business])
async def search_businesses(
    q: Optional[str] = Query(None, description="Search term"),
    db: AsyncSession = DB_DEPENDENCY,
) -> list[Business]:
    try:
        businesses = await BusinessService(db).search(q or "")
    except SQLAlchemyError as e:
        raise _storage_failure("searching businesses", e, q=q)
    return _to_list(businesses)


@router.get("/verified", response_model=list[Business])
async def verified_businesses(db: AsyncSession = DB_DEPENDENCY) -> list[Business]:
    try:
        businesses = await BusinessService(db).query(BusinessFilters(verified=True))
    except SQLAlchemyError as e:
        raise _storage_failure("listing verified businesses", e)
    return _to_list(businesses)


@router.get("/type/{business_type}", response_model=list[Business])
async def businesses_by_type(business_type: str, db: AsyncSession = DB_DEPENDENCY) -> list[Business]:
    filters = BusinessFilters(type=parse_business_type(business_type))
    try:
        businesses = await BusinessService(db).query(filters)
    except SQLAlchemyError as e:
        raise _storage_failure("listing businesses by type", e, type=business_type)
    return _to_list(businesses)


@router.get("/{business_id}", response_model=Business)
async def get_business(business_id: int, db: AsyncSession = DB_DEPENDENCY) -> Business:
    try:
        business = await BusinessService(db).get_business_or_raise(business_id)
    except SQLAlchemyError as e:
        raise _storage_failure("reading business", e, business_id=business_id)
    return Business.model_validate(business)


@router.post("", response_model=Envelope[Business], status_code=201)
async def create_business(
    request: CreateBusinessRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Add a directory entry."""
    try:
        business = await BusinessService(db).create_business(request)
    except SQLAlchemyError as e:
        raise _storage_failure("creating business", e, created_by=current_user.user_id)

    response_data = Envelope[Business](
        message="Business created successfully",
        data=Business.model_validate(business),
    )
    return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))


@router.put("/{business_id}", response_model=Envelope[Business])
async def update_business(
    business_id: int,
    request: UpdateBusinessRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Change the fields present in the body."""
    try:
        business = await BusinessService(db).update_business(business_id, request)
    except SQLAlchemyError as e:
        raise _storage_failure("updating business", e, business_id=business_id)

    response_data = Envelope[Business](
        message="Business updated successfully",
        data=Business.model_validate(business),
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.delete("/{business_id}", response_model=Envelope[Business])
async def delete_business(
    business_id: int,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Remove a directory entry and return it."""
    try:
        deleted = await BusinessService(db).delete_business(business_id)
    except SQLAlchemyError as e:
        raise _storage_failure("deleting business", e, business_id=business_id)

    response_data = Envelope[Business](message="Business deleted successfully", data=deleted)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
