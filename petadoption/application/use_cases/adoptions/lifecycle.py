from __future__ import annotations

import logging
from uuid import UUID

from petadoption.application.errors import InvalidTransition
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.domain.value_objects.adoption_status import AdoptionStatus, PetStatus

logger = logging.getLogger(__name__)

ADOPTED_BY_ANOTHER_USER = "Pet was adopted by another user"


def ensure_transition(current: AdoptionStatus, target: AdoptionStatus) -> None:
    if current.is_terminal:
        raise InvalidTransition(
            f"Adoption request is already {current.value.lower()}",
            details={"from": current.value, "to": target.value},
        )
    if not current.can_transition_to(target):
        raise InvalidTransition(
            f"Cannot change adoption status from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )


async def release_pet_if_idle(
    uow: UnitOfWork, pet_id: UUID, *, exclude_id: UUID | None = None
) -> bool:
    """Put a pet back on Available once no Pending request holds it.

    Only a pet currently in Pending is moved; Adopted pets and admin
    overrides are left alone. Returns True when the pet was released.
    """
    remaining = await uow.adoptions.count_pending_for_pet(pet_id, exclude_id=exclude_id)
    if remaining:
        return False
    released = await uow.pets.transition_status(
        pet_id, expected={PetStatus.PENDING}, new=PetStatus.AVAILABLE
    )
    if released:
        logger.info("Pet %s released back to Available", pet_id)
    return released is not None
