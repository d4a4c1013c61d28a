from sqlalchemy import Column, Integer, DateTime, Text, ForeignKey, Index, func
from app.models import Base

class Note(Base):
    __tablename__ = "notes"
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Existence is checked before insert; SQLite does not enforce the FK by default
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    note = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_notes_property_id_created_at", "property_id", "created_at"),
    )
