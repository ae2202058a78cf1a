"""Service model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from agenda.database import Base


class Service(Base):
    """Represents a service offered by a business."""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"))
    name = Column(String, nullable=False)
    slug = Column(String)
    duration = Column(Integer)  # minutes
