"""Business directory service."""

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..models.business import Business, BusinessType
from ..schemas.business import BusinessFilters, CreateBusinessRequest, UpdateBusinessRequest
from ..schemas.business import Business as BusinessSchema

logger = logging.getLogger(__name__)

SAMPLE_BUSINESSES = [
    {
        "name": "Traditional Restaurant",
        "type": BusinessType.RESTAURANT,
        "description": "Typical local food made with the best ingredients",
        "address": "123 Main Street, Downtown",
        "phone": "(11) 9999-9999",
        "rating": 4.5,
        "image_url": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=300",
        "is_verified": True,
    },
    {
        "name": "Handicraft Shop",
        "type": BusinessType.STORE,
        "description": "Handmade crafts by local artists",
        "address": "456 Arts Avenue",
        "phone": "(11) 8888-8888",
        "rating": 4.8,
        "image_url": "https://images.unsplash.com/photo-1560472354-b33ff0c44a43?w=300",
        "is_verified": True,
    },
    {
        "name": "Nature Inn",
        "type": BusinessType.HOTEL,
        "description": "Cozy inn overlooking the mountains",
        "address": "789 Mountain Road",
        "phone": "(11) 7777-7777",
        "rating": 4.7,
        "image_url": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=300",
        "is_verified": True,
    },
    {
        "name": "City Lookout",
        "type": BusinessType.ATTRACTION,
        "description": "Amazing panoramic view of the city",
        "address": "Lookout Hill",
        "phone": None,
        "rating": 4.9,
        "image_url": "https://images.unsplash.com/photo-1544551763-46a013bb70d5?w=300",
        "is_verified": True,
    },
]


class BusinessService:
    """Service for directory queries and CRUD."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def query(self, filters: Optional[BusinessFilters] = None) -> list[Business]:
        """
        Directory listing filtered by type, verification, minimum rating
        and free text. All given filters must match; highest rated first.
        """
        filters = filters or BusinessFilters()
        stmt = select(Business)

        if filters.type is not None:
            stmt = stmt.where(Business.type == filters.type.value)
        if filters.verified is not None:
            stmt = stmt.where(Business.is_verified.is_(filters.verified))
        if filters.min_rating is not None:
            stmt = stmt.where(Business.rating >= filters.min_rating)
        if filters.search:
            term = filters.search.lower()
            stmt = stmt.where(or_(
                func.lower(Business.name).contains(term, autoescape=True),
                func.lower(Business.description).contains(term, autoescape=True),
                func.lower(Business.address).contains(term, autoescape=True),
            ))

        stmt = stmt.order_by(Business.rating.desc(), Business.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def search(self, term: str) -> list[Business]:
        if not term or not term.strip():
            raise ValidationError("Search term is required")
        return await self.query(BusinessFilters(search=term.strip()))

    async def get_business(self, business_id: int) -> Optional[Business]:
        result = await self.db.execute(select(Business).where(Business.id == business_id))
        return result.scalar_one_or_none()

    async def get_business_or_raise(self, business_id: int) -> Business:
        business = await self.get_business(business_id)
        if not business:
            raise NotFoundError(resource_type="business", resource_id=business_id)
        return business

    async def create_business(self, request: CreateBusinessRequest) -> Business:
        business = Business(**request.model_dump())
        business.type = request.type.value

        self.db.add(business)
        await self.db.commit()
        await self.db.refresh(business)

        logger.info(
            "Business created",
            extra={"business_id": business.id, "type": business.type}
        )
        return business

    async def update_business(self, business_id: int, request: UpdateBusinessRequest) -> Business:
        """
        Apply the fields present in the body.

        Raises:
            ValidationError: If the body sets no field
            NotFoundError: If the business does not exist
        """
        changes = request.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")

        business = await self.get_business_or_raise(business_id)
        for field, value in changes.items():
            if isinstance(value, BusinessType):
                value = value.value
            setattr(business, field, value)

        await self.db.commit()
        await self.db.refresh(business)

        logger.info(
            "Business updated",
            extra={"business_id": business_id, "fields": sorted(changes)}
        )
        return business

    async def delete_business(self, business_id: int) -> BusinessSchema:
        """Delete a business and return the removed record."""
        business = await self.get_business_or_raise(business_id)
        deleted = BusinessSchema.model_validate(business)

        await self.db.delete(business)
        await self.db.commit()

        logger.info("Business deleted", extra={"business_id": business_id})
        return deleted

    async def seed_sample_businesses(self) -> int:
        """Insert the sample listings when the directory is empty."""
        count = (await self.db.execute(select(func.count(Business.id)))).scalar_one()
        if count:
            return 0

        for entry in SAMPLE_BUSINESSES:
            self.db.add(Business(**{**entry, "type": entry["type"].value}))
        await self.db.commit()

        logger.info("Sample businesses inserted", extra={"count": len(SAMPLE_BUSINESSES)})
        return len(SAMPLE_BUSINESSES)
