from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from petadoption.application.errors import ConflictError, NotFound, ValidationError
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.application.use_cases.adoptions.lifecycle import (
    ADOPTED_BY_ANOTHER_USER,
    ensure_transition,
    release_pet_if_idle,
)
from petadoption.domain.models.adoption import Adoption
from petadoption.domain.value_objects.adoption_status import AdoptionStatus, PetStatus

logger = logging.getLogger(__name__)

DECISION_ACTIONS = {
    AdoptionStatus.APPROVED: Action.ADOPTION_APPROVE,
    AdoptionStatus.REJECTED: Action.ADOPTION_REJECT,
    AdoptionStatus.CANCELLED: Action.ADOPTION_CANCEL,
}


@dataclass(slots=True)
class UpdateAdoptionStatusInput:
    status: str
    admin_comments: str | None = None


def parse_status(raw: str | None) -> AdoptionStatus:
    try:
        return AdoptionStatus(raw)
    except ValueError as exc:
        raise ValidationError(
            "Please provide a valid status",
            details={"allowed": [s.value for s in AdoptionStatus]},
        ) from exc


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    adoption_id: UUID,
    payload: UpdateAdoptionStatusInput,
) -> Adoption:
    target = parse_status(payload.status)

    adoption = await uow.adoptions.get(adoption_id)
    if not adoption:
        raise NotFound(f"Adoption not found with id of {adoption_id}")

    authorize(actor, Action.ADOPTION_READ, owner_id=adoption.user_id)
    action = DECISION_ACTIONS.get(target)
    if action is not None:
        authorize(actor, action, owner_id=adoption.user_id)
    ensure_transition(adoption.status, target)

    # Pet first, then its requests: every lifecycle write takes locks in this order
    await uow.pets.get_for_update(adoption.pet_id)
    if target is AdoptionStatus.APPROVED:
        await _reserve_pet(uow, adoption)

    decided_at = datetime.now(timezone.utc)
    updated = await uow.adoptions.transition(
        adoption_id,
        expected=adoption.status,
        new=target,
        admin_comments=payload.admin_comments or adoption.admin_comments,
        decision_date=decided_at,
    )
    if not updated:
        raise ConflictError("Adoption request was modified by another request")

    if target is AdoptionStatus.APPROVED:
        await _reject_competitors(uow, updated, decided_at)
    else:
        await release_pet_if_idle(uow, updated.pet_id, exclude_id=updated.id)

    await uow.commit()
    logger.info(
        "Adoption request %s moved %s -> %s by user %s",
        adoption_id,
        adoption.status.value,
        target.value,
        actor.user_id,
    )
    return updated


async def _reserve_pet(uow: UnitOfWork, adoption: Adoption) -> None:
    adopted = await uow.pets.transition_status(
        adoption.pet_id,
        expected={PetStatus.AVAILABLE, PetStatus.PENDING},
        new=PetStatus.ADOPTED,
    )
    if not adopted:
        raise ConflictError("Pet is no longer available to be adopted")


async def _reject_competitors(uow: UnitOfWork, adoption: Adoption, decided_at: datetime) -> None:
    rejected = await uow.adoptions.reject_pending_siblings(
        adoption.pet_id,
        exclude_id=adoption.id,
        comment=ADOPTED_BY_ANOTHER_USER,
        decision_date=decided_at,
    )
    logger.info(
        "Pet %s adopted through request %s; %d competing request(s) rejected",
        adoption.pet_id,
        adoption.id,
        rejected,
    )
