from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petadoption.application.errors import DuplicateError, NotFound
from petadoption.application.interfaces.repositories.users import UserRepository
from petadoption.domain.models.user import Address, User
from petadoption.infrastructure.db.orm.user import UserORM


class UsersSQLAlchemyRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: UserORM) -> User:
        return User(
            id=orm.id,
            name=orm.name,
            email=orm.email,
            hashed_password=orm.hashed_password,
            role=orm.role,
            phone=orm.phone,
            address=Address(
                street=orm.street,
                city=orm.city,
                state=orm.state,
                zip_code=orm.zip_code,
                country=orm.country,
            ),
            bio=orm.bio,
            is_active=orm.is_active,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, user: User) -> User:
        orm = UserORM(
            id=user.id,
            name=user.name,
            email=user.email,
            hashed_password=user.hashed_password,
            role=user.role,
            phone=user.phone,
            street=user.address.street,
            city=user.address.city,
            state=user.address.state,
            zip_code=user.address.zip_code,
            country=user.address.country,
            bio=user.bio,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateError("Email is already registered") from exc
        return self._to_domain(orm)

    async def get(self, user_id: UUID) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(UserORM).where(UserORM.id.in_(ids)))
        return {orm.id: self._to_domain(orm) for orm in result.scalars().all()}

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserORM).where(UserORM.email == email.lower())
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, *, offset: int = 0, limit: int = 10) -> list[User]:
        stmt = (
            select(UserORM)
            .order_by(UserORM.created_at.desc(), UserORM.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(UserORM.id)))
        return result.scalar() or 0

    async def update(self, user_id: UUID, data: dict) -> User | None:
        stmt = (
            update(UserORM)
            .where(UserORM.id == user_id)
            .values(**data)
            .returning(UserORM)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise DuplicateError("Email is already registered") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update_password(self, user_id: UUID, hashed_password: str) -> None:
        stmt = update(UserORM).where(UserORM.id == user_id).values(hashed_password=hashed_password)
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFound("User not found")

    async def delete(self, user_id: UUID) -> bool:
        stmt = delete(UserORM).where(UserORM.id == user_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0
