"""Contact model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from agenda.database import Base


class Contact(Base):
    """Represents a customer of a business."""
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"))
    firstname = Column(String)
    lastname = Column(String)
    email = Column(String)
    mobile = Column(String)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.firstname, self.lastname) if part)
