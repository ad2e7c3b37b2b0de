"""Profile model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.database import Base


class Profile(Base):
    """Optional contact details attached one-to-one to a user."""
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    phone = Column(String)
    address = Column(String)
    bio = Column(String)

    user = relationship("User", back_populates="profile")
