from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.common import is_blank, request_error
from app.schemas.note import NoteOut

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# Checked in this order; the first missing field is reported
REQUIRED_FIELDS = ("name", "address", "latitude", "longitude")


def in_range(value: float, bounds: tuple) -> bool:
    # NaN fails both comparisons
    return bounds[0] <= value <= bounds[1]


class PropertyCreate(BaseModel):
    name: str
    address: str
    latitude: float
    longitude: float
    nominatim_data: Optional[Any] = Field(None, description="Raw geocoder match, stored as-is")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Depot",
                "address": "1 Main St",
                "latitude": 40.0,
                "longitude": -73.0,
                "nominatim_data": {"display_name": "1, Main Street", "addresstype": "building", "place_rank": 30},
            }
        }

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise request_error("Invalid request body")
        for field in REQUIRED_FIELDS:
            if is_blank(data.get(field)):
                raise request_error(f"{field.capitalize()} is required")
        return data

    @field_validator("name", "address")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, value: float) -> float:
        if not in_range(value, LATITUDE_RANGE):
            raise request_error("Invalid latitude value")
        return value

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, value: float) -> float:
        if not in_range(value, LONGITUDE_RANGE):
            raise request_error("Invalid longitude value")
        return value


class PropertyOut(BaseModel):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    nominatim_data: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PropertySummary(BaseModel):
    id: int
    name: str
    address: str
    created_at: datetime

    class Config:
        from_attributes = True


class PropertySaved(BaseModel):
    success: bool = True
    property: PropertyOut


class PropertyDetail(BaseModel):
    property: PropertyOut
    notes: List[NoteOut]


class RecentProperties(BaseModel):
    success: bool = True
    properties: List[PropertySummary]
