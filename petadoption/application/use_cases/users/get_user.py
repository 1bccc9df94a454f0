from __future__ import annotations

from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.domain.models.user import User


async def execute(uow: UnitOfWork, actor: Actor, user_id: UUID) -> User:
    authorize(actor, Action.USER_READ, owner_id=user_id)
    user = await uow.users.get(user_id)
    if not user:
        raise NotFound(f"User not found with id of {user_id}")
    return user
