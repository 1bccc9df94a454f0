from __future__ import annotations

from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Actor
from petadoption.application.use_cases.adoptions.views import AdoptionView, build_views


async def execute(uow: UnitOfWork, actor: Actor) -> list[AdoptionView]:
    adoptions = await uow.adoptions.list(user_id=actor.user_id)
    return await build_views(uow, adoptions, with_user=False)
