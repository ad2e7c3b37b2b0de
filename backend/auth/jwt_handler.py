from datetime import datetime, timedelta, timezone

import jwt


class InvalidToken(Exception):
    """Raised when a token is malformed, tampered with or expired."""


class TokenIssuer:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 60 * 24) -> None:
        if not secret_key:
            raise ValueError("A signing secret is required.")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = timedelta(minutes=expires_minutes)

    def issue(self, claims: dict, ttl: timedelta | None = None, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        expire = issued_at + (ttl if ttl is not None else self.default_ttl)
        payload = {**claims, "iat": issued_at, "exp": expire}
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidToken(str(exc)) from exc
