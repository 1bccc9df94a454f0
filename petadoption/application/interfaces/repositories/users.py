from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from petadoption.domain.models.user import User


class UserRepository(Protocol):
    async def add(self, user: User) -> User: ...

    async def get(self, user_id: UUID) -> User | None: ...

    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list(self, *, offset: int = 0, limit: int = 10) -> list[User]: ...

    async def count(self) -> int: ...

    async def update(self, user_id: UUID, data: dict) -> User | None: ...

    async def update_password(self, user_id: UUID, hashed_password: str) -> None: ...

    async def delete(self, user_id: UUID) -> bool: ...
