"""Business model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from agenda.database import Base
from agenda.models.user import User


business_user = Table(
    "business_user",
    Base.metadata,
    Column("business_id", Integer, ForeignKey("businesses.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class Business(Base):
    """Represents a business taking appointments."""
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True)
    timezone = Column(String, default="UTC")

    owners = relationship(User, secondary=business_user, lazy="selectin")

    def is_owned_by(self, user: User) -> bool:
        return any(owner.id == user.id for owner in self.owners)
