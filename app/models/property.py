from sqlalchemy import Column, Integer, Float, DateTime, Text, Index, CheckConstraint, func
from app.models import Base

class Property(Base):
    __tablename__ = "properties"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    nominatim_data = Column(Text, nullable=True) # Raw geocoder match, JSON text stored verbatim
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_properties_created_at", "created_at"),
        CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_properties_latitude"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_properties_longitude"),
    )
