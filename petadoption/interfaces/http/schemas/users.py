from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from petadoption.domain.models.user import Address, User
from petadoption.domain.value_objects.role import Role

PHONE_PATTERN = r"^\+?[0-9\s\-()]{7,20}$"


class AddressSchema(BaseModel):
    street: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)

    def to_domain(self) -> Address:
        return Address(**self.model_dump())


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    role: Role
    phone: str | None = None
    address: AddressSchema
    bio: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        address = user.address
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            phone=user.phone,
            address=AddressSchema(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            bio=user.bio,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserSummary(BaseModel):
    id: UUID
    name: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> UserSummary:
        return cls(id=user.id, name=user.name, email=user.email)


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    bio: str | None = Field(default=None, max_length=500)
    address: AddressSchema | None = None
    role: Role | None = None
    is_active: bool | None = None


class PasswordChangeRequest(BaseModel):
    current_password: str | None = None
    new_password: str = Field(min_length=6)
