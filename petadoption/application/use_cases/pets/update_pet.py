from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields
from decimal import Decimal
from uuid import UUID

from petadoption.application.errors import NotFound
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.application.policies import Action, Actor, authorize
from petadoption.application.use_cases.pets.photos import (
    PhotoUpload,
    UploadLimits,
    discard_photos,
    store_photos,
    validate_uploads,
)
from petadoption.domain.models.pet import Pet
from petadoption.domain.value_objects.pet_attributes import (
    ActivityLevel,
    Gender,
    PetSize,
    Species,
)
from petadoption.infrastructure.storage.ports import StorageService


@dataclass(slots=True)
class UpdatePetInput:
    name: str | None = None
    species: Species | None = None
    breed: str | None = None
    size: PetSize | None = None
    gender: Gender | None = None
    color: str | None = None
    description: str | None = None
    adoption_fee: Decimal | None = None
    age_years: int | None = None
    age_months: int | None = None
    vaccinated: bool | None = None
    neutered: bool | None = None
    special_needs: bool | None = None
    special_needs_description: str | None = None
    good_with_kids: bool | None = None
    good_with_other_pets: bool | None = None
    activity_level: ActivityLevel | None = None
    latitude: float | None = None
    longitude: float | None = None
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


async def execute(
    uow: UnitOfWork,
    actor: Actor,
    pet_id: UUID,
    payload: UpdatePetInput,
    *,
    storage: StorageService,
    uploads: Sequence[PhotoUpload] = (),
    limits: UploadLimits = UploadLimits(),
) -> Pet:
    authorize(actor, Action.PET_UPDATE)
    existing = await uow.pets.get(pet_id)
    if not existing:
        raise NotFound(f"Pet not found with id of {pet_id}")
    validate_uploads(uploads, limits)

    data: dict = {}
    for item in fields(payload):
        value = getattr(payload, item.name)
        if value is not None:
            data[item.name] = value
    if not data and not uploads:
        return existing

    new_photos = []
    if uploads:
        new_photos = await store_photos(storage, pet_id, uploads, first_is_main=False)
        data["photos"] = [*existing.photos, *new_photos]
    try:
        updated = await uow.pets.update(pet_id, data)
        if not updated:
            raise NotFound(f"Pet not found with id of {pet_id}")
        await uow.commit()
    except Exception:
        await discard_photos(storage, new_photos)
        raise
    return updated
