import json
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import NotFoundError, StorageError, ValidationError
from app.core.result import Err, Ok, Result
from app.models.property import Property
from app.schemas.property import LATITUDE_RANGE, LONGITUDE_RANGE, PropertyOut, in_range

logger = get_logger()

RECENT_LIMIT = 10

# Range of the integer primary key; ids outside it can never exist
MAX_ID = 2147483647


def encode_payload(payload: Any) -> Optional[str]:
    if payload is None:
        return None
    return json.dumps(payload)


class PropertyRepository:
    """Data access for the ``properties`` table.

    Every method returns a ``Result``; expected failures (bad input, missing
    rows, store errors) never propagate as exceptions.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
        geocode_payload: Any = None,
    ) -> Result[PropertyOut]:
        name = (name or "").strip()
        address = (address or "").strip()
        if not name:
            return Err(ValidationError("Name is required"))
        if not address:
            return Err(ValidationError("Address is required"))
        if not in_range(latitude, LATITUDE_RANGE):
            return Err(ValidationError("Invalid latitude value"))
        if not in_range(longitude, LONGITUDE_RANGE):
            return Err(ValidationError("Invalid longitude value"))

        row = Property(
            name=name,
            address=address,
            latitude=latitude,
            longitude=longitude,
            nominatim_data=encode_payload(geocode_payload),
        )
        try:
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
        except SQLAlchemyError as e:
            await self.session.rollback()
            return Err(StorageError("Property insert failed", detail=str(e)))
        logger.info("Property created", property_id=row.id)
        return Ok(PropertyOut.model_validate(row))

    async def get_by_id(self, property_id: int) -> Result[PropertyOut]:
        if not 1 <= property_id <= MAX_ID:
            return Err(NotFoundError("Property not found"))
        try:
            row = await self.session.get(Property, property_id)
        except SQLAlchemyError as e:
            return Err(StorageError("Property lookup failed", detail=str(e)))
        if row is None:
            return Err(NotFoundError("Property not found"))
        return Ok(PropertyOut.model_validate(row))

    async def list_recent(self, limit: int = RECENT_LIMIT) -> Result[List[PropertyOut]]:
        query = (
            select(Property)
            .order_by(Property.created_at.desc(), Property.id.desc())
            .limit(limit)
        )
        try:
            rows = (await self.session.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            return Err(StorageError("Recent properties query failed", detail=str(e)))
        return Ok([PropertyOut.model_validate(row) for row in rows])
