from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from decimal import Decimal

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
from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import (
    ActivityLevel,
    Gender,
    PetSize,
    Species,
)
from petadoption.infrastructure.storage.ports import StorageService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreatePetInput:
    name: str
    species: Species
    breed: str
    size: PetSize
    gender: Gender
    color: str
    description: str
    adoption_fee: Decimal
    age_years: int | None = None
    age_months: int | None = None
    vaccinated: bool = False
    neutered: bool = False
    special_needs: bool = False
    special_needs_description: str | None = None
    good_with_kids: bool = True
    good_with_other_pets: bool = True
    activity_level: ActivityLevel = ActivityLevel.MEDIUM
    adoption_status: PetStatus = PetStatus.AVAILABLE
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
    payload: CreatePetInput,
    *,
    storage: StorageService,
    uploads: Sequence[PhotoUpload] = (),
    limits: UploadLimits = UploadLimits(),
) -> Pet:
    authorize(actor, Action.PET_CREATE)
    validate_uploads(uploads, limits)
    pet = Pet.create(**asdict(payload))
    # The first uploaded photo becomes the main one
    pet.photos = await store_photos(storage, pet.id, uploads, first_is_main=True)
    try:
        created = await uow.pets.add(pet)
        await uow.commit()
    except Exception:
        await discard_photos(storage, pet.photos)
        raise
    logger.info("Pet %s (%s) listed with %d photo(s)", created.id, created.name, len(pet.photos))
    return created
