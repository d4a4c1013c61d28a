from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import StorageError, ValidationError
from app.core.result import Err, Ok, Result
from app.models.note import Note
from app.schemas.note import NoteOut

logger = get_logger()


class NoteRepository:
    """Data access for the ``notes`` table.

    Callers check that the property exists before ``create``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, property_id: int, text: str) -> Result[NoteOut]:
        text = (text or "").strip()
        if not text:
            return Err(ValidationError("Note content is required"))

        row = Note(property_id=property_id, note=text)
        try:
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
        except SQLAlchemyError as e:
            await self.session.rollback()
            return Err(StorageError("Note insert failed", detail=str(e)))
        logger.info("Note created", property_id=property_id, note_id=row.id)
        return Ok(NoteOut.model_validate(row))

    async def list_by_property(self, property_id: int) -> Result[List[NoteOut]]:
        query = (
            select(Note)
            .where(Note.property_id == property_id)
            .order_by(Note.created_at.desc(), Note.id.desc())
        )
        try:
            rows = (await self.session.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            return Err(StorageError("Notes query failed", detail=str(e)))
        return Ok([NoteOut.model_validate(row) for row in rows])
