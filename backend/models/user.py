"""User model definitions."""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.profile import Profile  # noqa: F401


class Role(str, enum.Enum):
    """Closed set of dashboard roles."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


DEFAULT_ROLE = Role.STUDENT


def _new_user_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_user_id)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=DEFAULT_ROLE,
    )
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
