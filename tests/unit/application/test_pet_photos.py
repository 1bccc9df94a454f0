from __future__ import annotations

from dataclasses import asdict
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from petadoption.application.errors import InfrastructureError, NotFound
from petadoption.application.use_cases.pets import create_pet, update_pet
from petadoption.application.use_cases.pets.photos import PhotoUpload
from petadoption.domain.models.pet import Pet
from petadoption.domain.value_objects.pet_attributes import Gender, PetSize, Species
from petadoption.domain.value_objects.role import Role
from petadoption.infrastructure.storage.local import LocalStorageService


class RecordingStorage:
    def __init__(self, fail_on_put: int | None = None) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_on_put = fail_on_put
        self.puts = 0

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        self.puts += 1
        if self.fail_on_put == self.puts:
            raise InfrastructureError("Failed to store uploaded file")
        self.objects[key] = data

    async def get_public_url(self, key: str) -> str:
        return f"/uploads/{key}"

    async def delete_object(self, key: str) -> None:
        self.deleted.append(key)
        self.objects.pop(key, None)


class FailingPetRepo:
    def __init__(self, pet: Pet | None = None) -> None:
        self.pet = pet

    async def get(self, pet_id):
        return self.pet

    async def add(self, pet):
        raise InfrastructureError("Failed to save pet")

    async def update(self, pet_id, data):
        return None


def make_uow(pets):
    async def commit():
        return None

    return SimpleNamespace(pets=pets, commit=commit)


def admin():
    return SimpleNamespace(user_id=uuid4(), role=Role.ADMIN)


def uploads(count: int = 2) -> list[PhotoUpload]:
    return [PhotoUpload(f"photo{i}.png", "image/png", b"png-bytes") for i in range(count)]


def new_pet_input() -> create_pet.CreatePetInput:
    return create_pet.CreatePetInput(
        name="Rex",
        species=Species.DOG,
        breed="Labrador",
        size=PetSize.LARGE,
        gender=Gender.MALE,
        color="Black",
        description="Friendly",
        adoption_fee=Decimal("50"),
    )


@pytest.mark.asyncio
async def test_create_removes_stored_photos_when_save_fails():
    storage = RecordingStorage()
    with pytest.raises(InfrastructureError):
        await create_pet.execute(
            make_uow(FailingPetRepo()),
            admin(),
            new_pet_input(),
            storage=storage,
            uploads=uploads(),
        )
    assert len(storage.deleted) == 2
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_partial_upload_failure_removes_earlier_files():
    storage = RecordingStorage(fail_on_put=2)
    with pytest.raises(InfrastructureError):
        await create_pet.execute(
            make_uow(FailingPetRepo()),
            admin(),
            new_pet_input(),
            storage=storage,
            uploads=uploads(),
        )
    assert len(storage.deleted) == 1
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_update_removes_new_photos_when_pet_vanishes():
    existing = Pet.create(**asdict(new_pet_input()))
    storage = RecordingStorage()
    with pytest.raises(NotFound):
        await update_pet.execute(
            make_uow(FailingPetRepo(existing)),
            admin(),
            existing.id,
            update_pet.UpdatePetInput(),
            storage=storage,
            uploads=uploads(1),
        )
    assert len(storage.deleted) == 1
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_local_storage_delete_object(tmp_path):
    storage = LocalStorageService(tmp_path)
    await storage.put_object("pets/abc/one.png", b"data", "image/png")
    assert (tmp_path / "pets/abc/one.png").exists()
    await storage.delete_object("pets/abc/one.png")
    assert not (tmp_path / "pets/abc/one.png").exists()
    # Deleting again is a no-op
    await storage.delete_object("pets/abc/one.png")
