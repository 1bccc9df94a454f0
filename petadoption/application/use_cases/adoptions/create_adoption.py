from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from petadoption.application.errors import BadRequest, ConflictError, NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Actor
from petadoption.domain.models.adoption import Adoption, ApplicationDetails
from petadoption.domain.value_objects.adoption_status import PetStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateAdoptionInput:
    pet_id: UUID
    application: ApplicationDetails


async def execute(uow: UnitOfWork, actor: Actor, payload: CreateAdoptionInput) -> Adoption:
    pet = await uow.pets.get_for_update(payload.pet_id)
    if not pet:
        raise NotFound(f"Pet not found with id of {payload.pet_id}")
    if pet.adoption_status is not PetStatus.AVAILABLE:
        raise BadRequest(
            "Pet is not available for adoption, current status: "
            f"{pet.adoption_status.value}"
        )
    existing = await uow.adoptions.find_pending(actor.user_id, payload.pet_id)
    if existing:
        raise BadRequest("You already have a pending adoption request for this pet")

    adoption = Adoption.create(
        user_id=actor.user_id,
        pet_id=payload.pet_id,
        application=payload.application,
    )
    created = await uow.adoptions.add(adoption)
    held = await uow.pets.transition_status(
        payload.pet_id, expected={PetStatus.AVAILABLE}, new=PetStatus.PENDING
    )
    if not held:
        raise ConflictError("Pet status changed while the request was being submitted")
    await uow.commit()
    logger.info(
        "Adoption request %s created by user %s for pet %s",
        created.id,
        actor.user_id,
        payload.pet_id,
    )
    return created
