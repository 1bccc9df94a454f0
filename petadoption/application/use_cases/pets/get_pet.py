from __future__ import annotations

from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.domain.models.pet import Pet


async def execute(uow: UnitOfWork, pet_id: UUID) -> Pet:
    pet = await uow.pets.get(pet_id)
    if not pet:
        raise NotFound(f"Pet not found with id of {pet_id}")
    return pet
