from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.auth.dependencies import get_auth_service, get_current_identity
from backend.auth.service import AuthResult, AuthService, Identity
from backend.routes.schemas import AuthData, AuthResponse, IdentityEnvelope, IdentityResponse, UserResponse

router = APIRouter(tags=['auth'])


class SignupRequest(BaseModel):
    # Presence is checked by AuthService so that missing fields map to 400.
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


def _auth_response(result: AuthResult, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        data=AuthData(user=UserResponse.model_validate(result.user), token=result.token),
    )


@router.post('/signup', response_model=AuthResponse)
def signup(data: SignupRequest, service: AuthService = Depends(get_auth_service)):
    result = service.signup(name=data.name, email=data.email, password=data.password)
    return _auth_response(result, 'User created successfully')


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    result = service.login(email=data.email, password=data.password)
    return _auth_response(result, 'Login successful')


@router.get('/me', response_model=IdentityEnvelope)
def me(identity: Identity = Depends(get_current_identity)):
    return IdentityEnvelope(data=IdentityResponse.model_validate(identity))
