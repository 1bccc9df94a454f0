from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from petadoption.application.use_cases.adoptions.views import AdoptionView
from petadoption.domain.models.adoption import Adoption, ApplicationDetails
from petadoption.domain.value_objects.adoption_status import AdoptionStatus
from petadoption.domain.value_objects.pet_attributes import ResidenceType
from petadoption.interfaces.http.schemas.pets import PetSummary
from petadoption.interfaces.http.schemas.users import UserSummary


class ApplicationSchema(BaseModel):
    residence_type: ResidenceType
    has_yard: bool
    has_children: bool
    has_other_pets: bool
    other_pets_description: str | None = Field(default=None, max_length=1000)
    pet_experience: str = Field(min_length=1, max_length=2000)
    work_schedule: str = Field(min_length=1, max_length=1000)
    additional_comments: str | None = Field(default=None, max_length=2000)

    def to_domain(self) -> ApplicationDetails:
        return ApplicationDetails(
            residence_type=self.residence_type,
            has_yard=self.has_yard,
            has_children=self.has_children,
            has_other_pets=self.has_other_pets,
            pet_experience=self.pet_experience,
            work_schedule=self.work_schedule,
            other_pets_description=self.other_pets_description,
            additional_comments=self.additional_comments,
        )

    @classmethod
    def from_domain(cls, application: ApplicationDetails) -> ApplicationSchema:
        return cls(
            residence_type=application.residence_type,
            has_yard=application.has_yard,
            has_children=application.has_children,
            has_other_pets=application.has_other_pets,
            other_pets_description=application.other_pets_description,
            pet_experience=application.pet_experience,
            work_schedule=application.work_schedule,
            additional_comments=application.additional_comments,
        )


class AdoptionCreate(BaseModel):
    pet_id: UUID
    application: ApplicationSchema


class AdoptionStatusUpdate(BaseModel):
    # Kept as a plain string so unknown values surface as the domain's error message
    status: str | None = None
    admin_comments: str | None = Field(default=None, max_length=1000)


class AdoptionResponse(BaseModel):
    id: UUID
    user_id: UUID
    pet_id: UUID
    status: AdoptionStatus
    application: ApplicationSchema
    admin_comments: str | None = None
    decision_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    pet: PetSummary | None = None
    user: UserSummary | None = None

    @classmethod
    def from_domain(cls, adoption: Adoption) -> AdoptionResponse:
        return cls(
            id=adoption.id,
            user_id=adoption.user_id,
            pet_id=adoption.pet_id,
            status=adoption.status,
            application=ApplicationSchema.from_domain(adoption.application),
            admin_comments=adoption.admin_comments,
            decision_date=adoption.decision_date,
            created_at=adoption.created_at,
            updated_at=adoption.updated_at,
        )

    @classmethod
    def from_view(cls, view: AdoptionView) -> AdoptionResponse:
        response = cls.from_domain(view.adoption)
        response.pet = PetSummary.from_domain(view.pet) if view.pet else None
        response.user = UserSummary.from_domain(view.user) if view.user else None
        return response
