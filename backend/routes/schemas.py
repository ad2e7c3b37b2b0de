"""Response bodies shared by the auth and user routers."""

from pydantic import BaseModel

from backend.models.user import Role


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class IdentityResponse(BaseModel):
    id: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class AuthData(BaseModel):
    user: UserResponse
    token: str


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    data: AuthData


class IdentityEnvelope(BaseModel):
    success: bool = True
    data: IdentityResponse


class UserEnvelope(BaseModel):
    success: bool = True
    data: UserResponse


class UserListEnvelope(BaseModel):
    success: bool = True
    data: list[UserResponse]
