from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from petadoption.domain.value_objects.role import Role


@dataclass(slots=True)
class Address:
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


@dataclass(slots=True)
class User:
    id: UUID
    name: str
    email: str
    hashed_password: str
    role: Role = Role.USER
    phone: str | None = None
    address: Address = field(default_factory=Address)
    bio: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        hashed_password: str,
        *,
        role: Role = Role.USER,
        phone: str | None = None,
        address: Address | None = None,
        bio: str | None = None,
    ) -> User:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            name=name.strip(),
            email=email.lower(),
            hashed_password=hashed_password,
            role=role,
            phone=phone,
            address=address or Address(),
            bio=bio,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
