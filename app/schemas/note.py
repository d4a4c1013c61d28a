from datetime import datetime
from typing import Any

from pydantic import BaseModel, model_validator

from app.schemas.common import coerce_id, is_blank, request_error


class NoteCreate(BaseModel):
    property_id: int
    note: str

    @model_validator(mode="before")
    @classmethod
    def check_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise request_error("Invalid request body")
        property_id = coerce_id(data.get("property_id"))
        if property_id is None:
            raise request_error("Property ID is required")
        note = data.get("note")
        if not isinstance(note, str) or is_blank(note):
            raise request_error("Note content is required")
        return {"property_id": property_id, "note": note.strip()}


class NoteOut(BaseModel):
    id: int
    property_id: int
    note: str
    created_at: datetime

    class Config:
        from_attributes = True


class NoteSaved(BaseModel):
    success: bool = True
    note_id: int
