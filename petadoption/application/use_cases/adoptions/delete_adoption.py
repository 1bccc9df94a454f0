from __future__ import annotations

import logging
from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.application.use_cases.adoptions.lifecycle import release_pet_if_idle
from petadoption.domain.value_objects.adoption_status import AdoptionStatus

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, actor: Actor, adoption_id: UUID) -> None:
    authorize(actor, Action.ADOPTION_DELETE)
    adoption = await uow.adoptions.get(adoption_id)
    if not adoption:
        raise NotFound(f"Adoption not found with id of {adoption_id}")
    await uow.pets.get_for_update(adoption.pet_id)
    await uow.adoptions.delete(adoption_id)
    if adoption.status is AdoptionStatus.PENDING:
        await release_pet_if_idle(uow, adoption.pet_id)
    await uow.commit()
    logger.info("Adoption request %s deleted by user %s", adoption_id, actor.user_id)
