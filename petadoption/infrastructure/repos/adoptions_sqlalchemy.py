from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petadoption.application.errors import DuplicateError
from petadoption.application.interfaces.repositories.adoptions import AdoptionRepository
from petadoption.domain.models.adoption import Adoption, ApplicationDetails
from petadoption.domain.value_objects.adoption_status import AdoptionStatus
from petadoption.infrastructure.db.orm.adoption import AdoptionORM


class AdoptionsSQLAlchemyRepository(AdoptionRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AdoptionORM) -> Adoption:
        return Adoption(
            id=orm.id,
            user_id=orm.user_id,
            pet_id=orm.pet_id,
            application=ApplicationDetails(
                residence_type=orm.residence_type,
                has_yard=orm.has_yard,
                has_children=orm.has_children,
                has_other_pets=orm.has_other_pets,
                pet_experience=orm.pet_experience,
                work_schedule=orm.work_schedule,
                other_pets_description=orm.other_pets_description,
                additional_comments=orm.additional_comments,
            ),
            status=orm.status,
            admin_comments=orm.admin_comments,
            decision_date=orm.decision_date,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, adoption: Adoption) -> Adoption:
        application = adoption.application
        orm = AdoptionORM(
            id=adoption.id,
            user_id=adoption.user_id,
            pet_id=adoption.pet_id,
            status=adoption.status,
            residence_type=application.residence_type,
            has_yard=application.has_yard,
            has_children=application.has_children,
            has_other_pets=application.has_other_pets,
            other_pets_description=application.other_pets_description,
            pet_experience=application.pet_experience,
            work_schedule=application.work_schedule,
            additional_comments=application.additional_comments,
            admin_comments=adoption.admin_comments,
            decision_date=adoption.decision_date,
            created_at=adoption.created_at,
            updated_at=adoption.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateError(
                "An adoption request for this pet already exists for this user"
            ) from exc
        return self._to_domain(orm)

    async def get(self, adoption_id: UUID) -> Adoption | None:
        stmt = select(AdoptionORM).where(AdoptionORM.id == adoption_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Adoption]:
        stmt = select(AdoptionORM)
        if user_id is not None:
            stmt = stmt.where(AdoptionORM.user_id == user_id)
        stmt = stmt.order_by(AdoptionORM.created_at.desc(), AdoptionORM.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(self, *, user_id: UUID | None = None) -> int:
        stmt = select(func.count(AdoptionORM.id))
        if user_id is not None:
            stmt = stmt.where(AdoptionORM.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_for_pet(self, pet_id: UUID) -> list[Adoption]:
        stmt = (
            select(AdoptionORM)
            .where(AdoptionORM.pet_id == pet_id)
            .order_by(AdoptionORM.created_at.desc(), AdoptionORM.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def find_pending(self, user_id: UUID, pet_id: UUID) -> Adoption | None:
        stmt = select(AdoptionORM).where(
            and_(
                AdoptionORM.user_id == user_id,
                AdoptionORM.pet_id == pet_id,
                AdoptionORM.status == AdoptionStatus.PENDING,
            )
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def count_pending_for_pet(
        self, pet_id: UUID, *, exclude_id: UUID | None = None
    ) -> int:
        stmt = select(func.count(AdoptionORM.id)).where(
            AdoptionORM.pet_id == pet_id,
            AdoptionORM.status == AdoptionStatus.PENDING,
        )
        if exclude_id is not None:
            stmt = stmt.where(AdoptionORM.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def transition(
        self,
        adoption_id: UUID,
        *,
        expected: AdoptionStatus,
        new: AdoptionStatus,
        admin_comments: str | None,
        decision_date: datetime,
    ) -> Adoption | None:
        stmt = (
            update(AdoptionORM)
            .where(AdoptionORM.id == adoption_id)
            .where(AdoptionORM.status == expected)
            .values(status=new, admin_comments=admin_comments, decision_date=decision_date)
            .returning(AdoptionORM)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def reject_pending_siblings(
        self,
        pet_id: UUID,
        *,
        exclude_id: UUID,
        comment: str,
        decision_date: datetime,
    ) -> int:
        stmt = (
            update(AdoptionORM)
            .where(AdoptionORM.pet_id == pet_id)
            .where(AdoptionORM.id != exclude_id)
            .where(AdoptionORM.status == AdoptionStatus.PENDING)
            .values(
                status=AdoptionStatus.REJECTED,
                admin_comments=comment,
                decision_date=decision_date,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def delete(self, adoption_id: UUID) -> bool:
        stmt = delete(AdoptionORM).where(AdoptionORM.id == adoption_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete_for_pet(self, pet_id: UUID) -> int:
        stmt = delete(AdoptionORM).where(AdoptionORM.pet_id == pet_id)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def delete_for_user(self, user_id: UUID) -> int:
        stmt = delete(AdoptionORM).where(AdoptionORM.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
