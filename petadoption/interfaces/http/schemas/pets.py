from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from petadoption.domain.models.pet import Pet
from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import (
    ActivityLevel,
    Gender,
    PetSize,
    Species,
)


class LocationSchema(BaseModel):
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    formatted_address: str | None = Field(default=None, max_length=255)
    street: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)


class PetCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    species: Species
    breed: str = Field(min_length=1, max_length=100)
    age_years: int | None = Field(default=None, ge=0)
    age_months: int | None = Field(default=None, ge=0, le=11)
    size: PetSize
    gender: Gender
    color: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    vaccinated: bool = False
    neutered: bool = False
    special_needs: bool = False
    special_needs_description: str | None = Field(default=None, max_length=1000)
    good_with_kids: bool = True
    good_with_other_pets: bool = True
    activity_level: ActivityLevel = ActivityLevel.MEDIUM
    adoption_status: PetStatus = PetStatus.AVAILABLE
    adoption_fee: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    location: LocationSchema | None = None


class PetUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    species: Species | None = None
    breed: str | None = Field(default=None, min_length=1, max_length=100)
    age_years: int | None = Field(default=None, ge=0)
    age_months: int | None = Field(default=None, ge=0, le=11)
    size: PetSize | None = None
    gender: Gender | None = None
    color: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=1000)
    vaccinated: bool | None = None
    neutered: bool | None = None
    special_needs: bool | None = None
    special_needs_description: str | None = Field(default=None, max_length=1000)
    good_with_kids: bool | None = None
    good_with_other_pets: bool | None = None
    activity_level: ActivityLevel | None = None
    adoption_fee: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    location: LocationSchema | None = None


class PetStatusUpdate(BaseModel):
    adoption_status: str | None = None


class PhotoSchema(BaseModel):
    url: str
    public_id: str | None = None
    is_main: bool = False


class PetResponse(BaseModel):
    id: UUID
    name: str
    species: Species
    breed: str
    age_years: int | None = None
    age_months: int | None = None
    size: PetSize
    gender: Gender
    color: str
    description: str
    photos: list[PhotoSchema] = Field(default_factory=list)
    vaccinated: bool
    neutered: bool
    special_needs: bool
    special_needs_description: str | None = None
    good_with_kids: bool
    good_with_other_pets: bool
    activity_level: ActivityLevel
    adoption_status: PetStatus
    adoption_fee: float
    location: LocationSchema | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, pet: Pet) -> PetResponse:
        location = LocationSchema(
            latitude=pet.latitude,
            longitude=pet.longitude,
            formatted_address=pet.formatted_address,
            street=pet.street,
            city=pet.city,
            state=pet.state,
            zip_code=pet.zip_code,
            country=pet.country,
        )
        has_location = any(value is not None for value in location.model_dump().values())
        return cls(
            id=pet.id,
            name=pet.name,
            species=pet.species,
            breed=pet.breed,
            age_years=pet.age_years,
            age_months=pet.age_months,
            size=pet.size,
            gender=pet.gender,
            color=pet.color,
            description=pet.description,
            photos=[PhotoSchema(**photo.to_dict()) for photo in pet.photos],
            vaccinated=pet.vaccinated,
            neutered=pet.neutered,
            special_needs=pet.special_needs,
            special_needs_description=pet.special_needs_description,
            good_with_kids=pet.good_with_kids,
            good_with_other_pets=pet.good_with_other_pets,
            activity_level=pet.activity_level,
            adoption_status=pet.adoption_status,
            adoption_fee=float(pet.adoption_fee),
            location=location if has_location else None,
            created_at=pet.created_at,
            updated_at=pet.updated_at,
        )


def project_pet(pet: Pet, select: frozenset[str] | None) -> dict[str, Any]:
    data = PetResponse.from_domain(pet).model_dump(mode="json")
    if not select:
        return data
    return {key: value for key, value in data.items() if key in select}


class PetSummary(BaseModel):
    id: UUID
    name: str
    species: Species
    breed: str
    photos: list[PhotoSchema] = Field(default_factory=list)
    adoption_status: PetStatus

    @classmethod
    def from_domain(cls, pet: Pet) -> PetSummary:
        return cls(
            id=pet.id,
            name=pet.name,
            species=pet.species,
            breed=pet.breed,
            photos=[PhotoSchema(**photo.to_dict()) for photo in pet.photos],
            adoption_status=pet.adoption_status,
        )
