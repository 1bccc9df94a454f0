from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from petadoption.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """One session, one transaction. Anything not committed is rolled back on exit."""

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.pets = None
        self.adoptions = None
        self.users = None

    async def __aenter__(self) -> UnitOfWork:
        from petadoption.infrastructure.repos.adoptions_sqlalchemy import (
            AdoptionsSQLAlchemyRepository,
        )
        from petadoption.infrastructure.repos.pets_sqlalchemy import PetsSQLAlchemyRepository
        from petadoption.infrastructure.repos.users_sqlalchemy import UsersSQLAlchemyRepository

        self.session = self._session_factory()
        self.pets = PetsSQLAlchemyRepository(self.session)
        self.adoptions = AdoptionsSQLAlchemyRepository(self.session)
        self.users = UsersSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            # Uncommitted work is discarded whether or not the block raised
            await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.pets = None
            self.adoptions = None
            self.users = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
