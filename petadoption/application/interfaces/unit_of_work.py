from __future__ import annotations

from typing import Protocol

from petadoption.application.interfaces.repositories.adoptions import AdoptionRepository
from petadoption.application.interfaces.repositories.pets import PetRepository
from petadoption.application.interfaces.repositories.users import UserRepository


class UnitOfWork(Protocol):
    pets: PetRepository
    adoptions: AdoptionRepository
    users: UserRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
