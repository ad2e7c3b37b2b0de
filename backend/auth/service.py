"""Signup, login and request authentication.

Tokens are stateless: they cannot be revoked before they expire, and the
identity returned by ``authenticate`` is the one encoded at issuance. A role
change in the store only takes effect once the user's current token expires.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from backend.auth.jwt_handler import InvalidToken, TokenIssuer
from backend.auth.passwords import MAX_PASSWORD_BYTES, PasswordHasher
from backend.auth.store import CredentialStore, DuplicateEmailError, StoreError, UserRecord
from backend.core.errors import (
    AuthError,
    ConflictError,
    Forbidden,
    InternalError,
    Unauthenticated,
    ValidationError,
)
from backend.models.user import Role

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    role: Role


@dataclass(frozen=True)
class AuthResult:
    user: UserRecord
    token: str


def _require_fields(message: str, **fields) -> dict[str, str]:
    cleaned = {}
    for key, value in fields.items():
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(message)
        cleaned[key] = value
    return cleaned


def parse_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthenticated("Missing or invalid Authorization header")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token or " " in token:
        raise Unauthenticated("Missing or invalid Authorization header")
    return token


class AuthService:
    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: TokenIssuer) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        # Compared against on unknown emails so both login failures cost one bcrypt check.
        self._dummy_hash = hasher.hash("not-a-real-password")

    def issue_token(self, user: UserRecord) -> str:
        return self.tokens.issue({"id": user.id, "email": user.email, "role": user.role.value})

    def signup(self, name, email, password) -> AuthResult:
        fields = _require_fields("Name, email, and password are required", name=name, email=email, password=password)
        if len(fields["password"].encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        try:
            if self.store.find_by_email(fields["email"]) is not None:
                raise ConflictError()
            hashed_password = self.hasher.hash(fields["password"])
            user = self.store.create_user(
                name=fields["name"],
                email=fields["email"],
                hashed_password=hashed_password,
            )
            token = self.issue_token(user)
        except AuthError:
            raise
        except DuplicateEmailError as exc:
            raise ConflictError() from exc
        except Exception as exc:
            logger.exception("Signup failed")
            raise InternalError() from exc

        logger.info("Registered user %s with role %s", user.id, user.role.value)
        return AuthResult(user=user, token=token)

    def login(self, email, password) -> AuthResult:
        fields = _require_fields("Email and password are required", email=email, password=password)

        try:
            user = self.store.find_by_email(fields["email"])
            if user is None:
                self.hasher.verify(fields["password"], self._dummy_hash)
                valid = False
            else:
                valid = self.hasher.verify(fields["password"], user.hashed_password)
            token = self.issue_token(user) if valid else None
        except Exception as exc:
            logger.exception("Login failed")
            raise InternalError() from exc

        if not valid:
            logger.info("Rejected login attempt")
            raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)
        return AuthResult(user=user, token=token)

    def authenticate(self, authorization: str | None, roles: Iterable[Role] | None = None) -> Identity:
        token = parse_bearer_token(authorization)

        try:
            claims = self.tokens.verify(token)
        except InvalidToken as exc:
            raise Unauthenticated("Invalid or expired token") from exc

        try:
            identity = Identity(id=str(claims["id"]), email=str(claims["email"]), role=Role(claims["role"]))
        except (KeyError, ValueError) as exc:
            raise Unauthenticated("Invalid token claims") from exc

        try:
            user = self.store.find_by_id(identity.id)
        except StoreError as exc:
            logger.exception("User lookup failed during authentication")
            raise InternalError() from exc
        if user is None:
            raise Unauthenticated("User not found")

        if roles is not None and identity.role not in {Role(role) for role in roles}:
            raise Forbidden()
        return identity

    def list_users(self) -> list[UserRecord]:
        try:
            return self.store.list_users()
        except StoreError as exc:
            logger.exception("User listing failed")
            raise InternalError() from exc

    def get_user(self, user_id: str) -> UserRecord | None:
        try:
            return self.store.find_by_id(user_id)
        except StoreError as exc:
            logger.exception("User lookup failed")
            raise InternalError() from exc
