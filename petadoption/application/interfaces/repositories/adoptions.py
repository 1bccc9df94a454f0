from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from petadoption.domain.models.adoption import Adoption
from petadoption.domain.value_objects.adoption_status import AdoptionStatus


class AdoptionRepository(Protocol):
    async def add(self, adoption: Adoption) -> Adoption: ...

    async def get(self, adoption_id: UUID) -> Adoption | None: ...

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Adoption]: ...

    async def count(self, *, user_id: UUID | None = None) -> int: ...

    async def list_for_pet(self, pet_id: UUID) -> list[Adoption]: ...

    async def find_pending(self, user_id: UUID, pet_id: UUID) -> Adoption | None: ...

    async def count_pending_for_pet(
        self, pet_id: UUID, *, exclude_id: UUID | None = None
    ) -> int: ...

    async def transition(
        self,
        adoption_id: UUID,
        *,
        expected: AdoptionStatus,
        new: AdoptionStatus,
        admin_comments: str | None,
        decision_date: datetime,
    ) -> Adoption | None: ...

    async def reject_pending_siblings(
        self,
        pet_id: UUID,
        *,
        exclude_id: UUID,
        comment: str,
        decision_date: datetime,
    ) -> int: ...

    async def delete(self, adoption_id: UUID) -> bool: ...

    async def delete_for_pet(self, pet_id: UUID) -> int: ...

    async def delete_for_user(self, user_id: UUID) -> int: ...
