from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import (
    ActivityLevel,
    Gender,
    PetSize,
    Species,
)


@dataclass(slots=True)
class PetPhoto:
    url: str
    public_id: str | None = None
    is_main: bool = False

    def to_dict(self) -> dict:
        return {"url": self.url, "public_id": self.public_id, "is_main": self.is_main}

    @classmethod
    def from_dict(cls, data: dict) -> PetPhoto:
        return cls(
            url=data["url"],
            public_id=data.get("public_id"),
            is_main=bool(data.get("is_main", False)),
        )


@dataclass(slots=True)
class Pet:
    id: UUID
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
    photos: list[PetPhoto] = field(default_factory=list)

    # Medical
    vaccinated: bool = False
    neutered: bool = False
    special_needs: bool = False
    special_needs_description: str | None = None

    # Behavior
    good_with_kids: bool = True
    good_with_other_pets: bool = True
    activity_level: ActivityLevel = ActivityLevel.MEDIUM

    adoption_status: PetStatus = PetStatus.AVAILABLE

    # Location
    latitude: float | None = None
    longitude: float | None = None
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, **fields) -> Pet:
        now = datetime.now(timezone.utc)
        fields.setdefault("adoption_status", PetStatus.AVAILABLE)
        return cls(id=uuid4(), created_at=now, updated_at=now, **fields)
