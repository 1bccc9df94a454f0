from __future__ import annotations

from dataclasses import dataclass

from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.pagination import PageRequest, Pagination, build_pagination
from petadoption.application.policies import Action, Actor, authorize
from petadoption.domain.models.user import User


@dataclass(slots=True)
class ListUsersResult:
    items: list[User]
    total: int
    pagination: Pagination


async def execute(uow: UnitOfWork, actor: Actor, page: PageRequest) -> ListUsersResult:
    authorize(actor, Action.USER_LIST)
    total = await uow.users.count()
    items = await uow.users.list(offset=page.offset, limit=page.limit)
    return ListUsersResult(items=items, total=total, pagination=build_pagination(page, total))
