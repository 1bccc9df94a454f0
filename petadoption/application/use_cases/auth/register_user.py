from __future__ import annotations

import logging
from dataclasses import dataclass

from petadoption.application.errors import DuplicateError
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.domain.models.user import Address, User
from petadoption.domain.value_objects.role import Role
from petadoption.infrastructure.auth.password import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RegisterUserInput:
    name: str
    email: str
    password: str
    role: Role = Role.USER
    phone: str | None = None
    address: Address | None = None
    bio: str | None = None


async def execute(
    *,
    uow: UnitOfWork,
    payload: RegisterUserInput,
    password_hasher: PasswordHasher,
    allow_admin_signup: bool = False,
) -> User:
    existing = await uow.users.get_by_email(payload.email)
    if existing:
        raise DuplicateError("Email is already registered")
    role = payload.role if allow_admin_signup else Role.USER
    user = User.create(
        name=payload.name,
        email=payload.email,
        hashed_password=password_hasher.hash(payload.password),
        role=role,
        phone=payload.phone,
        address=payload.address,
        bio=payload.bio,
    )
    created = await uow.users.add(user)
    await uow.commit()
    logger.info("Registered user %s with role %s", created.id, created.role.value)
    return created
