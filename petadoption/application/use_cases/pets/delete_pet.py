from __future__ import annotations

import logging
from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, actor: Actor, pet_id: UUID) -> None:
    authorize(actor, Action.PET_DELETE)
    pet = await uow.pets.get_for_update(pet_id)
    if not pet:
        raise NotFound(f"Pet not found with id of {pet_id}")
    removed = await uow.adoptions.delete_for_pet(pet_id)
    await uow.pets.delete(pet_id)
    await uow.commit()
    logger.info("Pet %s deleted along with %d adoption request(s)", pet_id, removed)
