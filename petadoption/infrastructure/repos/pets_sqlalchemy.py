from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petadoption.application.errors import InfrastructureError
from petadoption.application.interfaces.repositories.pets import PetRepository
from petadoption.application.pet_query import FieldFilter, FilterOp, PetQuery
from petadoption.domain.models.pet import Pet, PetPhoto
from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.infrastructure.db.orm.pet import PetORM

_COMPARATORS = {
    FilterOp.EQ: lambda column, value: column == value,
    FilterOp.GT: lambda column, value: column > value,
    FilterOp.GTE: lambda column, value: column >= value,
    FilterOp.LT: lambda column, value: column < value,
    FilterOp.LTE: lambda column, value: column <= value,
    FilterOp.IN: lambda column, value: column.in_(value),
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PetsSQLAlchemyRepository(PetRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PetORM) -> Pet:
        return Pet(
            id=orm.id,
            name=orm.name,
            species=orm.species,
            breed=orm.breed,
            size=orm.size,
            gender=orm.gender,
            color=orm.color,
            description=orm.description,
            adoption_fee=orm.adoption_fee,
            age_years=orm.age_years,
            age_months=orm.age_months,
            photos=[PetPhoto.from_dict(item) for item in orm.photos or []],
            vaccinated=orm.vaccinated,
            neutered=orm.neutered,
            special_needs=orm.special_needs,
            special_needs_description=orm.special_needs_description,
            good_with_kids=orm.good_with_kids,
            good_with_other_pets=orm.good_with_other_pets,
            activity_level=orm.activity_level,
            adoption_status=orm.adoption_status,
            latitude=orm.latitude,
            longitude=orm.longitude,
            formatted_address=orm.formatted_address,
            street=orm.street,
            city=orm.city,
            state=orm.state,
            zip_code=orm.zip_code,
            country=orm.country,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, pet: Pet) -> Pet:
        orm = PetORM(
            id=pet.id,
            name=pet.name,
            species=pet.species,
            breed=pet.breed,
            size=pet.size,
            gender=pet.gender,
            color=pet.color,
            description=pet.description,
            adoption_fee=pet.adoption_fee,
            age_years=pet.age_years,
            age_months=pet.age_months,
            photos=[photo.to_dict() for photo in pet.photos],
            vaccinated=pet.vaccinated,
            neutered=pet.neutered,
            special_needs=pet.special_needs,
            special_needs_description=pet.special_needs_description,
            good_with_kids=pet.good_with_kids,
            good_with_other_pets=pet.good_with_other_pets,
            activity_level=pet.activity_level,
            adoption_status=pet.adoption_status,
            latitude=pet.latitude,
            longitude=pet.longitude,
            formatted_address=pet.formatted_address,
            street=pet.street,
            city=pet.city,
            state=pet.state,
            zip_code=pet.zip_code,
            country=pet.country,
            created_at=pet.created_at,
            updated_at=pet.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise InfrastructureError("Failed to save pet") from exc
        return self._to_domain(orm)

    async def get(self, pet_id: UUID) -> Pet | None:
        stmt = select(PetORM).where(PetORM.id == pet_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_for_update(self, pet_id: UUID) -> Pet | None:
        # Row lock on the pet serializes every write touching its adoption requests
        stmt = select(PetORM).where(PetORM.id == pet_id).with_for_update()
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_many(self, pet_ids: Iterable[UUID]) -> dict[UUID, Pet]:
        ids = set(pet_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(PetORM).where(PetORM.id.in_(ids)))
        return {orm.id: self._to_domain(orm) for orm in result.scalars().all()}

    def _apply_filters(self, stmt, query: PetQuery):
        for item in query.filters:
            stmt = stmt.where(self._condition(item))
        if query.search:
            pattern = f"%{_escape_like(query.search.lower())}%"
            stmt = stmt.where(
                or_(
                    func.lower(PetORM.name).like(pattern, escape="\\"),
                    func.lower(PetORM.breed).like(pattern, escape="\\"),
                    func.lower(PetORM.description).like(pattern, escape="\\"),
                )
            )
        return stmt

    @staticmethod
    def _condition(item: FieldFilter):
        column = getattr(PetORM, item.field)
        return _COMPARATORS[item.op](column, item.value)

    async def list(self, query: PetQuery) -> list[Pet]:
        stmt = self._apply_filters(select(PetORM), query)
        order_by = []
        for key in query.sort:
            column = getattr(PetORM, key.field)
            order_by.append(column.desc() if key.descending else column.asc())
        # Stable paging when sort keys tie
        order_by.append(PetORM.id.asc())
        stmt = stmt.order_by(*order_by).offset(query.page.offset).limit(query.page.limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(self, query: PetQuery) -> int:
        stmt = self._apply_filters(select(func.count(PetORM.id)), query)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def update(self, pet_id: UUID, data: dict) -> Pet | None:
        values = dict(data)
        if "photos" in values:
            values["photos"] = [
                photo.to_dict() if isinstance(photo, PetPhoto) else photo
                for photo in values["photos"]
            ]
        stmt = (
            update(PetORM)
            .where(PetORM.id == pet_id)
            .values(**values)
            .returning(PetORM)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to update pet") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, pet_id: UUID) -> bool:
        stmt = delete(PetORM).where(PetORM.id == pet_id).returning(PetORM.id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def set_status(self, pet_id: UUID, status: PetStatus) -> Pet | None:
        return await self.update(pet_id, {"adoption_status": status})

    async def transition_status(
        self,
        pet_id: UUID,
        *,
        expected: Iterable[PetStatus],
        new: PetStatus,
    ) -> Pet | None:
        # Compare-and-set: a concurrent writer that moved the pet first wins
        stmt = (
            update(PetORM)
            .where(PetORM.id == pet_id)
            .where(PetORM.adoption_status.in_(list(expected)))
            .values(adoption_status=new)
            .returning(PetORM)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
