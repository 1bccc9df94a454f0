from __future__ import annotations

from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.application.use_cases.adoptions.views import AdoptionView, build_views


async def execute(uow: UnitOfWork, actor: Actor, adoption_id: UUID) -> AdoptionView:
    adoption = await uow.adoptions.get(adoption_id)
    if not adoption:
        raise NotFound(f"Adoption not found with id of {adoption_id}")
    authorize(actor, Action.ADOPTION_READ, owner_id=adoption.user_id)
    views = await build_views(uow, [adoption])
    return views[0]
