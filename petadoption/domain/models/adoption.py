from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from petadoption.domain.value_objects.adoption_status import AdoptionStatus
from petadoption.domain.value_objects.pet_attributes import ResidenceType


@dataclass(slots=True)
class ApplicationDetails:
    residence_type: ResidenceType
    has_yard: bool
    has_children: bool
    has_other_pets: bool
    pet_experience: str
    work_schedule: str
    other_pets_description: str | None = None
    additional_comments: str | None = None


@dataclass(slots=True)
class Adoption:
    id: UUID
    user_id: UUID
    pet_id: UUID
    application: ApplicationDetails
    status: AdoptionStatus = AdoptionStatus.PENDING
    admin_comments: str | None = None
    decision_date: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, user_id: UUID, pet_id: UUID, application: ApplicationDetails) -> Adoption:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            user_id=user_id,
            pet_id=pet_id,
            application=application,
            status=AdoptionStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
