from __future__ import annotations

import logging
from uuid import UUID

from petadoption.application.errors import NotFound, ValidationError
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.domain.models.pet import Pet
from petadoption.domain.value_objects.adoption_status import PetStatus

logger = logging.getLogger(__name__)


def parse_status(raw: str | None) -> PetStatus:
    try:
        return PetStatus(raw)
    except ValueError as exc:
        raise ValidationError(
            "Please provide a valid adoption status",
            details={"allowed": [s.value for s in PetStatus]},
        ) from exc


async def execute(uow: UnitOfWork, actor: Actor, pet_id: UUID, status: str | None) -> Pet:
    """Admin override of a pet's adoption status; no lifecycle checks apply."""
    authorize(actor, Action.PET_SET_STATUS)
    target = parse_status(status)
    pet = await uow.pets.set_status(pet_id, target)
    if not pet:
        raise NotFound(f"Pet not found with id of {pet_id}")
    await uow.commit()
    logger.info("Pet %s status overridden to %s by user %s", pet_id, target.value, actor.user_id)
    return pet
