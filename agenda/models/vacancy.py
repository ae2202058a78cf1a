"""Vacancy model definitions."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer
from agenda.database import Base


class Vacancy(Base):
    """Represents a published window in which a service can be booked."""
    __tablename__ = "vacancies"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"))
    service_id = Column(Integer, ForeignKey("services.id"))
    date = Column(Date)
    start_at = Column(DateTime)
    finish_at = Column(DateTime)
    capacity = Column(Integer, default=1)
