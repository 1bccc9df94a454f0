from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from petadoption.config.settings import Settings
from petadoption.domain.models.pet import Pet
from petadoption.domain.models.user import User
from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import Gender, PetSize, Species
from petadoption.domain.value_objects.role import Role
from petadoption.infrastructure.auth.password import PasswordHasher
from petadoption.infrastructure.db.base import Base
from petadoption.infrastructure.db.orm import adoption, pet, user  # noqa: F401
from petadoption.infrastructure.db.session import SQLAlchemyUnitOfWork
from petadoption.infrastructure.storage.local import LocalStorageService
from petadoption.interfaces.http.main import create_app

DEFAULT_PASSWORD = "secret123"


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret-key",
            "log_level": "INFO",
            "environment": "test",
            "upload_dir": str(tmp_path / "uploads"),
        }
    )


@pytest.fixture()
def app(test_settings: Settings, tmp_path):
    return create_app(
        settings=test_settings,
        password_hasher=PasswordHasher(rounds=4),
        storage_service=LocalStorageService(tmp_path / "uploads"),
    )


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await engine.dispose()


def auth_headers(app, account: User) -> dict[str, str]:
    token = app.state.jwt_service.create_access_token(
        subject=account.id, extra_claims={"role": account.role.value}
    )
    return {"Authorization": f"Bearer {token}"}


async def seed_user(app, name: str, email: str, role: Role = Role.USER) -> SimpleNamespace:
    hasher: PasswordHasher = app.state.password_hasher
    async with SQLAlchemyUnitOfWork(app.state.session_factory) as uow:
        created = await uow.users.add(
            User.create(name, email, hasher.hash(DEFAULT_PASSWORD), role=role)
        )
        await uow.commit()
    return SimpleNamespace(user=created, id=created.id, headers=auth_headers(app, created))


async def seed_pet(app, name: str = "Rex", **overrides) -> Pet:
    fields = {
        "name": name,
        "species": Species.DOG,
        "breed": "Labrador",
        "size": PetSize.LARGE,
        "gender": Gender.MALE,
        "color": "Black",
        "description": f"{name} is a friendly pet",
        "adoption_fee": Decimal("100.00"),
        "age_years": 3,
        "adoption_status": PetStatus.AVAILABLE,
    }
    fields.update(overrides)
    async with SQLAlchemyUnitOfWork(app.state.session_factory) as uow:
        created = await uow.pets.add(Pet.create(**fields))
        await uow.commit()
    return created


async def load_pet(app, pet_id) -> Pet | None:
    async with SQLAlchemyUnitOfWork(app.state.session_factory) as uow:
        return await uow.pets.get(UUID(str(pet_id)))


async def load_adoption(app, adoption_id):
    async with SQLAlchemyUnitOfWork(app.state.session_factory) as uow:
        return await uow.adoptions.get(UUID(str(adoption_id)))


@pytest.fixture()
def factory(app) -> SimpleNamespace:
    async def pet_for_app(name: str = "Rex", **overrides) -> Pet:
        return await seed_pet(app, name, **overrides)

    async def user_for_app(name: str, email: str, role: Role = Role.USER) -> SimpleNamespace:
        return await seed_user(app, name, email, role)

    async def pet_by_id(pet_id):
        return await load_pet(app, pet_id)

    async def adoption_by_id(adoption_id):
        return await load_adoption(app, adoption_id)

    return SimpleNamespace(
        pet=pet_for_app,
        user=user_for_app,
        load_pet=pet_by_id,
        load_adoption=adoption_by_id,
        password=DEFAULT_PASSWORD,
    )


@pytest.fixture()
async def admin(app, client) -> SimpleNamespace:
    return await seed_user(app, "Admin", "admin@example.com", Role.ADMIN)


@pytest.fixture()
async def alice(app, client) -> SimpleNamespace:
    return await seed_user(app, "Alice", "alice@example.com")


@pytest.fixture()
async def bob(app, client) -> SimpleNamespace:
    return await seed_user(app, "Bob", "bob@example.com")


@pytest.fixture()
def application_payload() -> dict:
    return {
        "residence_type": "House",
        "has_yard": True,
        "has_children": False,
        "has_other_pets": False,
        "pet_experience": "Grew up with dogs",
        "work_schedule": "Remote, flexible hours",
    }
