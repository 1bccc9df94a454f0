from __future__ import annotations

from dataclasses import dataclass, fields
from uuid import UUID

from petadoption.application.errors import DuplicateError, NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.domain.models.user import User
from petadoption.domain.value_objects.role import Role


@dataclass(slots=True)
class UpdateUserInput:
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    role: Role | None = None
    is_active: bool | None = None


async def execute(
    uow: UnitOfWork, actor: Actor, user_id: UUID, payload: UpdateUserInput
) -> User:
    authorize(actor, Action.USER_UPDATE, owner_id=user_id)
    if payload.role is not None or payload.is_active is not None:
        authorize(actor, Action.USER_CHANGE_ROLE)
    existing = await uow.users.get(user_id)
    if not existing:
        raise NotFound(f"User not found with id of {user_id}")

    data: dict = {}
    for item in fields(payload):
        value = getattr(payload, item.name)
        if value is not None:
            data[item.name] = value
    if "email" in data:
        data["email"] = data["email"].lower()
        other = await uow.users.get_by_email(data["email"])
        if other and other.id != user_id:
            raise DuplicateError("Email is already registered")
    if not data:
        return existing

    updated = await uow.users.update(user_id, data)
    if not updated:
        raise NotFound(f"User not found with id of {user_id}")
    await uow.commit()
    return updated
