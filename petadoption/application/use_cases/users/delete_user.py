from __future__ import annotations

import logging
from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.application.use_cases.adoptions.lifecycle import release_pet_if_idle
from petadoption.domain.value_objects.adoption_status import AdoptionStatus

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, actor: Actor, user_id: UUID) -> None:
    authorize(actor, Action.USER_DELETE)
    user = await uow.users.get(user_id)
    if not user:
        raise NotFound(f"User not found with id of {user_id}")
    adoptions = await uow.adoptions.list(user_id=user_id)
    held_pets = {a.pet_id for a in adoptions if a.status is AdoptionStatus.PENDING}
    for pet_id in sorted(held_pets, key=str):
        await uow.pets.get_for_update(pet_id)
    await uow.adoptions.delete_for_user(user_id)
    await uow.users.delete(user_id)
    for pet_id in held_pets:
        await release_pet_if_idle(uow, pet_id)
    await uow.commit()
    logger.info(
        "User %s deleted; %d adoption request(s) removed", user_id, len(adoptions)
    )
