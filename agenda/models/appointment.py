"""Appointment model definitions."""

import hashlib
from datetime import datetime, timedelta
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, event
from sqlalchemy.orm import relationship

from agenda.core import config
from agenda.database import Base
from agenda.models.business import Business
from agenda.models.contact import Contact
from agenda.models.service import Service
from agenda.models.user import User
from agenda.models.vacancy import Vacancy


class AppointmentStatus(str, Enum):
    RESERVED = "R"
    CONFIRMED = "C"
    ANNULATED = "A"
    SERVED = "S"

    @property
    def label(self) -> str:
        return self.name.lower()


class Appointment(Base):
    """Represents a scheduled appointment."""
    __tablename__ = "appointments"

    STATUS_RESERVED = AppointmentStatus.RESERVED.value
    STATUS_CONFIRMED = AppointmentStatus.CONFIRMED.value
    STATUS_ANNULATED = AppointmentStatus.ANNULATED.value
    STATUS_SERVED = AppointmentStatus.SERVED.value

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False)
    issuer_id = Column(Integer, ForeignKey("users.id"))
    contact_id = Column(Integer, ForeignKey("contacts.id"))
    service_id = Column(Integer, ForeignKey("services.id"))
    vacancy_id = Column(Integer, ForeignKey("vacancies.id"))
    status = Column(String(1), nullable=False, default=STATUS_RESERVED)
    start_at = Column(DateTime, nullable=False)
    duration = Column(Integer)  # minutes
    comments = Column(String)
    hash = Column(String(32), index=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    business = relationship(Business)
    issuer = relationship(User)
    contact = relationship(Contact)
    service = relationship(Service)
    vacancy = relationship(Vacancy)

    @property
    def finish_at(self) -> datetime | None:
        if self.start_at is None or not self.duration:
            return None
        return self.start_at + timedelta(minutes=self.duration)

    @property
    def code(self) -> str:
        return (self.hash or self.build_hash())[:config.APPOINTMENT_CODE_LENGTH].upper()

    def build_hash(self) -> str:
        start_at = self.start_at.isoformat() if self.start_at else ""
        seed = f"{start_at}/{self.business_id}/{self.service_id}/{self.contact_id}"
        return hashlib.md5(seed.encode("utf-8")).hexdigest()


@event.listens_for(Appointment, "before_insert")
def assign_appointment_hash(_mapper, _connection, target: Appointment) -> None:
    if not target.hash:
        target.hash = target.build_hash()
