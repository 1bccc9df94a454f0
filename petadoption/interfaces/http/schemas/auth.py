from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from petadoption.domain.value_objects.role import Role
from petadoption.interfaces.http.schemas.users import PHONE_PATTERN, AddressSchema


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = Role.USER
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    address: AddressSchema | None = None
    bio: str | None = Field(default=None, max_length=500)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthUser(BaseModel):
    id: UUID
    name: str
    email: str
    role: Role


class TokenResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: AuthUser
