from __future__ import annotations

from dataclasses import dataclass

from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.pagination import Pagination, build_pagination
from petadoption.application.pet_query import PetQuery
from petadoption.domain.models.pet import Pet


@dataclass(slots=True)
class ListPetsResult:
    items: list[Pet]
    total: int
    pagination: Pagination
    select: frozenset[str] | None = None


async def execute(uow: UnitOfWork, query: PetQuery) -> ListPetsResult:
    total = await uow.pets.count(query)
    items = await uow.pets.list(query)
    return ListPetsResult(
        items=items,
        total=total,
        pagination=build_pagination(query.page, total),
        select=query.select,
    )
