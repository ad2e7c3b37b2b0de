from fastapi import APIRouter, Depends

from backend.auth.dependencies import get_auth_service, require_roles
from backend.auth.service import AuthService
from backend.core.errors import NotFoundError
from backend.models.user import Role
from backend.routes.schemas import UserEnvelope, UserListEnvelope, UserResponse

router = APIRouter(tags=['users'])


@router.get('', response_model=UserListEnvelope, dependencies=[Depends(require_roles(Role.ADMIN))])
def list_users(service: AuthService = Depends(get_auth_service)):
    users = service.list_users()
    return UserListEnvelope(data=[UserResponse.model_validate(user) for user in users])


@router.get(
    '/{user_id}',
    response_model=UserEnvelope,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.TEACHER))],
)
def get_user(user_id: str, service: AuthService = Depends(get_auth_service)):
    user = service.get_user(user_id)
    if user is None:
        raise NotFoundError('User not found')
    return UserEnvelope(data=UserResponse.model_validate(user))
