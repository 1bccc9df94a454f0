from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from petadoption.application.errors import AuthError, NotFound, ValidationError
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.infrastructure.auth.password import PasswordHasher


@dataclass(slots=True)
class ChangePasswordInput:
    user_id: UUID
    new_password: str
    current_password: str | None = None


async def execute(
    *,
    uow: UnitOfWork,
    actor: Actor,
    payload: ChangePasswordInput,
    password_hasher: PasswordHasher,
) -> None:
    authorize(actor, Action.USER_CHANGE_PASSWORD, owner_id=payload.user_id)
    target_user = await uow.users.get(payload.user_id)
    if not target_user:
        raise NotFound(f"User not found with id of {payload.user_id}")
    # Admins resetting someone else's password skip the current-password check
    if actor.user_id == payload.user_id:
        if not payload.current_password:
            raise ValidationError("Please provide your current password")
        if not password_hasher.verify(payload.current_password, target_user.hashed_password):
            raise AuthError("Incorrect current password")
    hashed = password_hasher.hash(payload.new_password)
    await uow.users.update_password(payload.user_id, hashed)
    await uow.commit()
