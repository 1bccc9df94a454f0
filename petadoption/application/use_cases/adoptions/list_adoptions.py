from __future__ import annotations

from dataclasses import dataclass

from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.pagination import PageRequest, Pagination, build_pagination
from petadoption.application.policies import Actor
from petadoption.application.use_cases.adoptions.views import AdoptionView, build_views


@dataclass(slots=True)
class ListAdoptionsResult:
    items: list[AdoptionView]
    total: int
    pagination: Pagination


async def execute(uow: UnitOfWork, actor: Actor, page: PageRequest) -> ListAdoptionsResult:
    # Admins see every request, everyone else only their own
    user_id = None if actor.role.is_admin() else actor.user_id
    total = await uow.adoptions.count(user_id=user_id)
    adoptions = await uow.adoptions.list(user_id=user_id, offset=page.offset, limit=page.limit)
    items = await build_views(uow, adoptions)
    return ListAdoptionsResult(
        items=items, total=total, pagination=build_pagination(page, total)
    )
