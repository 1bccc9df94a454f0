from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import (
    ActivityLevel,
    Gender,
    PetSize,
    Species,
)
from petadoption.infrastructure.db.base import Base


def enum_column(enum_cls, name: str) -> Enum:
    # Persist the human readable values ("Guinea Pig"), not member names
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
        length=32,
    )


class PetORM(Base):
    __tablename__ = "pets"
    __table_args__ = (
        Index(
            "ix_pets_catalogue",
            "species",
            "breed",
            "adoption_status",
            "size",
            "gender",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    species: Mapped[Species] = mapped_column(enum_column(Species, "pet_species"), nullable=False)
    breed: Mapped[str] = mapped_column(String(100), nullable=False)
    age_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    age_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    size: Mapped[PetSize] = mapped_column(enum_column(PetSize, "pet_size"), nullable=False)
    gender: Mapped[Gender] = mapped_column(enum_column(Gender, "pet_gender"), nullable=False)
    color: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    photos: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    # Medical
    vaccinated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    neutered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    special_needs: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    special_needs_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Behavior
    good_with_kids: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    good_with_other_pets: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    activity_level: Mapped[ActivityLevel] = mapped_column(
        enum_column(ActivityLevel, "pet_activity_level"),
        nullable=False,
        default=ActivityLevel.MEDIUM,
    )

    adoption_status: Mapped[PetStatus] = mapped_column(
        enum_column(PetStatus, "pet_adoption_status"),
        nullable=False,
        default=PetStatus.AVAILABLE,
        index=True,
    )
    adoption_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Location
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    formatted_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
