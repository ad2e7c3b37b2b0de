"""Credential storage behind a single interface.

``InMemoryCredentialStore`` backs tests and demos, ``SqlAlchemyCredentialStore``
backs the running service. Both reject a second user with the same email
atomically, so the uniqueness of emails does not depend on callers checking
first.
"""

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from backend.models.profile import Profile
from backend.models.user import DEFAULT_ROLE, Role, User


class StoreError(Exception):
    """Base class for credential store failures."""


class DuplicateEmailError(StoreError):
    pass


class StoreUnavailableError(StoreError):
    pass


@dataclass(frozen=True)
class UserRecord:
    id: str
    email: str
    name: str
    hashed_password: str = field(repr=False)
    role: Role
    created_at: datetime | None = None


class CredentialStore(Protocol):
    def find_by_email(self, email: str) -> UserRecord | None: ...

    def find_by_id(self, user_id: str) -> UserRecord | None: ...

    def create_user(
        self,
        name: str,
        email: str,
        hashed_password: str,
        role: Role = DEFAULT_ROLE,
    ) -> UserRecord: ...

    def list_users(self) -> list[UserRecord]: ...


class InMemoryCredentialStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, UserRecord] = {}
        self._id_by_email: dict[str, str] = {}

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._lock:
            user_id = self._id_by_email.get(email)
            return self._by_id.get(user_id) if user_id else None

    def find_by_id(self, user_id: str) -> UserRecord | None:
        with self._lock:
            return self._by_id.get(user_id)

    def create_user(
        self,
        name: str,
        email: str,
        hashed_password: str,
        role: Role = DEFAULT_ROLE,
    ) -> UserRecord:
        with self._lock:
            if email in self._id_by_email:
                raise DuplicateEmailError(email)
            record = UserRecord(
                id=uuid.uuid4().hex,
                email=email,
                name=name,
                hashed_password=hashed_password,
                role=Role(role),
                created_at=datetime.now(timezone.utc),
            )
            self._by_id[record.id] = record
            self._id_by_email[email] = record.id
            return record

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            record = self._by_id.pop(user_id, None)
            if record is not None:
                del self._id_by_email[record.email]

    def list_users(self) -> list[UserRecord]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda record: record.created_at)


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        email=user.email,
        name=user.name,
        hashed_password=user.hashed_password,
        role=Role(user.role),
        created_at=user.created_at,
    )


class SqlAlchemyCredentialStore:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> UserRecord | None:
        db = self._session_factory()
        try:
            user = db.query(User).filter(User.email == email).first()
            return _to_record(user) if user else None
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("User lookup failed") from exc
        finally:
            db.close()

    def find_by_id(self, user_id: str) -> UserRecord | None:
        db = self._session_factory()
        try:
            user = db.get(User, user_id)
            return _to_record(user) if user else None
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("User lookup failed") from exc
        finally:
            db.close()

    def create_user(
        self,
        name: str,
        email: str,
        hashed_password: str,
        role: Role = DEFAULT_ROLE,
    ) -> UserRecord:
        db = self._session_factory()
        try:
            user = User(name=name, email=email, hashed_password=hashed_password, role=Role(role))
            user.profile = Profile()
            db.add(user)
            db.commit()
            db.refresh(user)
            return _to_record(user)
        except IntegrityError as exc:
            db.rollback()
            # The unique index on users.email settles concurrent signups.
            raise DuplicateEmailError(email) from exc
        except SQLAlchemyError as exc:
            db.rollback()
            raise StoreUnavailableError("User creation failed") from exc
        finally:
            db.close()

    def list_users(self) -> list[UserRecord]:
        db = self._session_factory()
        try:
            users = db.query(User).order_by(User.created_at.asc()).all()
            return [_to_record(user) for user in users]
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("User listing failed") from exc
        finally:
            db.close()
