from typing import Callable

from fastapi import Depends, Header, Request

from backend.auth.service import AuthService, Identity
from backend.models.user import Role


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_current_identity(
    authorization: str | None = Header(None),
    service: AuthService = Depends(get_auth_service),
) -> Identity:
    return service.authenticate(authorization)


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """Build a dependency that only admits identities holding one of ``roles``."""
    permitted = tuple(Role(role) for role in roles)

    def dependency(
        authorization: str | None = Header(None),
        service: AuthService = Depends(get_auth_service),
    ) -> Identity:
        return service.authenticate(authorization, roles=permitted)

    return dependency
