from __future__ import annotations

from uuid import UUID

from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.application.use_cases.adoptions.views import AdoptionView, build_views


async def execute(uow: UnitOfWork, actor: Actor, pet_id: UUID) -> list[AdoptionView]:
    authorize(actor, Action.ADOPTION_LIST_FOR_PET)
    adoptions = await uow.adoptions.list_for_pet(pet_id)
    return await build_views(uow, adoptions, with_pet=False)
