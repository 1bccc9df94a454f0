from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from petadoption.application.pet_query import PetQuery
from petadoption.domain.models.pet import Pet
from petadoption.domain.value_objects.adoption_status import PetStatus


class PetRepository(Protocol):
    async def add(self, pet: Pet) -> Pet: ...

    async def get(self, pet_id: UUID) -> Pet | None: ...

    async def get_for_update(self, pet_id: UUID) -> Pet | None: ...

    async def get_many(self, pet_ids: Iterable[UUID]) -> dict[UUID, Pet]: ...

    async def list(self, query: PetQuery) -> list[Pet]: ...

    async def count(self, query: PetQuery) -> int: ...

    async def update(self, pet_id: UUID, data: dict) -> Pet | None: ...

    async def delete(self, pet_id: UUID) -> bool: ...

    async def set_status(self, pet_id: UUID, status: PetStatus) -> Pet | None: ...

    async def transition_status(
        self,
        pet_id: UUID,
        *,
        expected: Iterable[PetStatus],
        new: PetStatus,
    ) -> Pet | None: ...
