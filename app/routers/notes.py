from fastapi import APIRouter, Depends
from structlog import get_logger

from app.core.errors import error_response
from app.core.result import Err
from app.dependencies.repositories import get_note_repository, get_property_repository
from app.repositories.note import NoteRepository
from app.repositories.property import PropertyRepository
from app.schemas.note import NoteCreate, NoteSaved

logger = get_logger()
router = APIRouter(prefix="/api", tags=["notes"])

FAILED_MESSAGE = "Failed to add note. Please try again later."

@router.post("/add_note", response_model=NoteSaved)
async def add_note(
    payload: NoteCreate,
    properties: PropertyRepository = Depends(get_property_repository),
    notes: NoteRepository = Depends(get_note_repository),
):
    # The notes table cannot be relied on to reject orphans, so check first
    found = await properties.get_by_id(payload.property_id)
    if isinstance(found, Err):
        return error_response(found.error, FAILED_MESSAGE, property_id=payload.property_id)

    result = await notes.create(payload.property_id, payload.note)
    if isinstance(result, Err):
        return error_response(result.error, FAILED_MESSAGE, property_id=payload.property_id)
    logger.info("Note added", property_id=payload.property_id, note_id=result.value.id)
    return NoteSaved(note_id=result.value.id)
