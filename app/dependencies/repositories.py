from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.repositories.note import NoteRepository
from app.repositories.property import PropertyRepository


async def get_property_repository(db: AsyncSession = Depends(get_db)) -> PropertyRepository:
    return PropertyRepository(db)


async def get_note_repository(db: AsyncSession = Depends(get_db)) -> NoteRepository:
    return NoteRepository(db)
