from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from petadoption.domain.value_objects.adoption_status import AdoptionStatus
from petadoption.domain.value_objects.pet_attributes import ResidenceType
from petadoption.infrastructure.db.base import Base
from petadoption.infrastructure.db.orm.pet import enum_column


class AdoptionORM(Base):
    __tablename__ = "adoptions"
    # One request per (user, pet) pair, whatever its status
    __table_args__ = (UniqueConstraint("user_id", "pet_id", name="ux_adoptions_user_pet"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pet_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("pets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[AdoptionStatus] = mapped_column(
        enum_column(AdoptionStatus, "adoption_status"),
        nullable=False,
        default=AdoptionStatus.PENDING,
        index=True,
    )

    # Application questionnaire
    residence_type: Mapped[ResidenceType] = mapped_column(
        enum_column(ResidenceType, "residence_type"), nullable=False
    )
    has_yard: Mapped[bool] = mapped_column(Boolean, nullable=False)
    has_children: Mapped[bool] = mapped_column(Boolean, nullable=False)
    has_other_pets: Mapped[bool] = mapped_column(Boolean, nullable=False)
    other_pets_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    pet_experience: Mapped[str] = mapped_column(Text, nullable=False)
    work_schedule: Mapped[str] = mapped_column(Text, nullable=False)
    additional_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    admin_comments: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    decision_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
