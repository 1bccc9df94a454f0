from __future__ import annotations

import json
from decimal import Decimal

import pytest

from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import Species

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

PET_FIELDS = {
    "name": "Luna",
    "species": "Cat",
    "breed": "Siamese",
    "age_years": 2,
    "size": "Small",
    "gender": "Female",
    "color": "Cream",
    "description": "Calm indoor cat",
    "adoption_fee": 75,
    "vaccinated": True,
    "location": {"city": "Austin", "state": "TX", "latitude": 30.27, "longitude": -97.74},
}


def photo(name: str = "luna.png", content_type: str = "image/png", data: bytes = PNG_BYTES):
    return ("photos", (name, data, content_type))


@pytest.mark.asyncio
async def test_admin_creates_pet_with_photos(client, admin):
    response = await client.post(
        "/api/pets",
        data={"data": json.dumps(PET_FIELDS)},
        files=[photo("first.png"), photo("second.png")],
        headers=admin.headers,
    )
    assert response.status_code == 201
    pet = response.json()["data"]
    assert pet["name"] == "Luna"
    assert pet["adoption_status"] == "Available"
    assert pet["adoption_fee"] == 75
    assert pet["location"]["city"] == "Austin"
    assert [p["is_main"] for p in pet["photos"]] == [True, False]
    assert pet["photos"][0]["url"].startswith(f"/uploads/pets/{pet['id']}/")

    served = await client.get(pet["photos"][0]["url"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


@pytest.mark.asyncio
async def test_create_pet_requires_admin(client, alice):
    response = await client.post(
        "/api/pets", data={"data": json.dumps(PET_FIELDS)}, headers=alice.headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_pet_validates_payload(client, admin):
    invalid = {**PET_FIELDS, "species": "Dragon", "adoption_fee": -1}
    response = await client.post(
        "/api/pets", data={"data": json.dumps(invalid)}, headers=admin.headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_create_pet_rejects_too_many_or_wrong_files(client, admin):
    too_many = await client.post(
        "/api/pets",
        data={"data": json.dumps(PET_FIELDS)},
        files=[photo(f"p{i}.png") for i in range(6)],
        headers=admin.headers,
    )
    assert too_many.status_code == 400

    not_image = await client.post(
        "/api/pets",
        data={"data": json.dumps(PET_FIELDS)},
        files=[photo("notes.txt", "text/plain", b"hello")],
        headers=admin.headers,
    )
    assert not_image.status_code == 400


@pytest.mark.asyncio
async def test_get_pet_and_missing_pet(client, factory):
    pet = await factory.pet(name="Bolt")
    response = await client.get(f"/api/pets/{pet.id}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Bolt"

    missing = await client.get("/api/pets/00000000-0000-0000-0000-000000000000")
    assert missing.status_code == 404
    assert missing.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_list_filters_search_sort_and_select(client, factory):
    await factory.pet(name="Cheap", adoption_fee=Decimal("50"))
    await factory.pet(name="Middle", adoption_fee=Decimal("150"), breed="Beagle")
    await factory.pet(name="Pricey", adoption_fee=Decimal("250"), species=Species.CAT)

    response = await client.get(
        "/api/pets", params={"adoption_fee[lte]": "150", "sort": "-adoption_fee"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [p["name"] for p in body["data"]] == ["Middle", "Cheap"]

    searched = (await client.get("/api/pets", params={"search": "beag"})).json()
    assert [p["name"] for p in searched["data"]] == ["Middle"]

    combined = (
        await client.get("/api/pets", params={"search": "friendly", "species": "Cat"})
    ).json()
    assert [p["name"] for p in combined["data"]] == ["Pricey"]

    projected = (
        await client.get("/api/pets", params={"select": "name,adoption_fee", "sort": "name"})
    ).json()
    assert set(projected["data"][0]) == {"id", "name", "adoption_fee"}
    assert projected["data"][0]["name"] == "Cheap"


@pytest.mark.asyncio
async def test_list_pagination_links(client, factory):
    for index in range(25):
        await factory.pet(name=f"Pet {index:02d}")
    response = await client.get("/api/pets", params={"page": 2, "limit": 10, "sort": "name"})
    body = response.json()
    assert body["count"] == 10
    assert body["data"][0]["name"] == "Pet 10"
    assert body["pagination"] == {
        "next": {"page": 3, "limit": 10},
        "prev": {"page": 1, "limit": 10},
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"owner": "me"}, {"adoption_fee[regex]": "1"}, {"sort": "secret"}, {"limit": "500"}],
)
async def test_list_rejects_unknown_query_options(client, params):
    response = await client.get("/api/pets", params=params)
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_update_pet_appends_photos(client, admin, factory):
    pet = await factory.pet(name="Old name")
    created = await client.put(
        f"/api/pets/{pet.id}",
        data={"data": json.dumps({"name": "New name"})},
        files=[photo("extra.png")],
        headers=admin.headers,
    )
    assert created.status_code == 200
    data = created.json()["data"]
    assert data["name"] == "New name"
    assert data["breed"] == "Labrador"
    assert len(data["photos"]) == 1
    assert data["photos"][0]["is_main"] is False


@pytest.mark.asyncio
async def test_set_status_override(client, admin, alice, factory):
    pet = await factory.pet()
    denied = await client.put(
        f"/api/pets/{pet.id}/status", json={"adoption_status": "Adopted"}, headers=alice.headers
    )
    assert denied.status_code == 403

    invalid = await client.put(
        f"/api/pets/{pet.id}/status", json={"adoption_status": "Gone"}, headers=admin.headers
    )
    assert invalid.status_code == 400

    response = await client.put(
        f"/api/pets/{pet.id}/status", json={"adoption_status": "Adopted"}, headers=admin.headers
    )
    assert response.status_code == 200
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.ADOPTED


@pytest.mark.asyncio
async def test_delete_pet_removes_its_requests(
    client, admin, alice, factory, application_payload
):
    pet = await factory.pet()
    created = await client.post(
        "/api/adoptions",
        json={"pet_id": str(pet.id), "application": application_payload},
        headers=alice.headers,
    )
    adoption_id = created.json()["data"]["id"]

    response = await client.delete(f"/api/pets/{pet.id}", headers=admin.headers)
    assert response.status_code == 200
    assert await factory.load_pet(pet.id) is None
    assert await factory.load_adoption(adoption_id) is None


@pytest.mark.asyncio
async def test_search_treats_like_wildcards_literally(client, factory):
    await factory.pet(name="Rex")
    await factory.pet(name="Promo", description="Fee cut by 50% this week")

    wildcard = (await client.get("/api/pets", params={"search": "%"})).json()
    assert wildcard["count"] == 1
    assert [p["name"] for p in wildcard["data"]] == ["Promo"]

    underscore = (await client.get("/api/pets", params={"search": "r_x"})).json()
    assert underscore["count"] == 0

    literal = (await client.get("/api/pets", params={"search": "50% this"})).json()
    assert [p["name"] for p in literal["data"]] == ["Promo"]
