from typing import Optional

from fastapi import APIRouter, Depends, Query
from structlog import get_logger

from app.core.errors import ValidationError, error_response
from app.core.result import Err
from app.dependencies.repositories import get_note_repository, get_property_repository
from app.repositories.note import NoteRepository
from app.repositories.property import PropertyRepository
from app.schemas.common import coerce_id
from app.schemas.property import (
    PropertyCreate,
    PropertyDetail,
    PropertySaved,
    PropertySummary,
    RecentProperties,
)

logger = get_logger()
router = APIRouter(prefix="/api", tags=["properties"])

@router.post("/save_property", response_model=PropertySaved)
async def save_property(
    payload: PropertyCreate,
    properties: PropertyRepository = Depends(get_property_repository),
):
    result = await properties.create(
        name=payload.name,
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
        geocode_payload=payload.nominatim_data,
    )
    if isinstance(result, Err):
        return error_response(result.error, "Failed to save property. Please try again later.")
    logger.info("Property saved", property_id=result.value.id)
    return PropertySaved(property=result.value)

@router.get("/property", response_model=PropertyDetail)
async def get_property(
    id: Optional[str] = Query(None, description="Numeric property identifier"),
    properties: PropertyRepository = Depends(get_property_repository),
    notes: NoteRepository = Depends(get_note_repository),
):
    property_id = coerce_id(id)
    if property_id is None:
        return error_response(ValidationError("Property ID is required"))

    found = await properties.get_by_id(property_id)
    if isinstance(found, Err):
        return error_response(
            found.error, "Failed to retrieve property data. Please try again later.", property_id=property_id
        )

    listed = await notes.list_by_property(property_id)
    if isinstance(listed, Err):
        return error_response(
            listed.error, "Failed to retrieve property data. Please try again later.", property_id=property_id
        )
    return PropertyDetail(property=found.value, notes=listed.value)

@router.get("/recent_properties", response_model=RecentProperties)
async def recent_properties(properties: PropertyRepository = Depends(get_property_repository)):
    result = await properties.list_recent()
    if isinstance(result, Err):
        return error_response(result.error, "Failed to fetch recent properties", extra={"success": False})
    return RecentProperties(
        properties=[PropertySummary.model_validate(item.model_dump()) for item in result.value]
    )
