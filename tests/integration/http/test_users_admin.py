from __future__ import annotations

import pytest

from petadoption.domain.value_objects.adoption_status import PetStatus


@pytest.mark.asyncio
async def test_only_admin_lists_users(client, admin, alice, bob):
    denied = await client.get("/api/users", headers=alice.headers)
    assert denied.status_code == 403

    response = await client.get("/api/users?limit=2", headers=admin.headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["pagination"] == {"next": {"page": 2, "limit": 2}}


@pytest.mark.asyncio
async def test_user_reads_self_not_others(client, alice, bob):
    own = await client.get(f"/api/users/{alice.id}", headers=alice.headers)
    assert own.status_code == 200
    assert own.json()["data"]["email"] == "alice@example.com"

    other = await client.get(f"/api/users/{bob.id}", headers=alice.headers)
    assert other.status_code == 403


@pytest.mark.asyncio
async def test_user_updates_profile_but_not_role(client, alice):
    response = await client.put(
        f"/api/users/{alice.id}",
        json={"name": "Alice B", "bio": "Cat person", "address": {"city": "Reno"}},
        headers=alice.headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Alice B"
    assert data["address"]["city"] == "Reno"

    promote = await client.put(
        f"/api/users/{alice.id}", json={"role": "admin"}, headers=alice.headers
    )
    assert promote.status_code == 403


@pytest.mark.asyncio
async def test_admin_promotes_user(client, admin, alice):
    response = await client.put(
        f"/api/users/{alice.id}", json={"role": "admin"}, headers=admin.headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "admin"

    # The stored role applies to the next request even with the old token
    listing = await client.get("/api/users", headers=alice.headers)
    assert listing.status_code == 200


@pytest.mark.asyncio
async def test_deactivated_user_is_locked_out(client, admin, alice):
    response = await client.put(
        f"/api/users/{alice.id}", json={"is_active": False}, headers=admin.headers
    )
    assert response.status_code == 200
    locked = await client.get("/api/auth/me", headers=alice.headers)
    assert locked.status_code == 401


@pytest.mark.asyncio
async def test_change_own_password_requires_current(client, alice, factory):
    missing = await client.put(
        f"/api/users/{alice.id}/password",
        json={"new_password": "brand-new"},
        headers=alice.headers,
    )
    assert missing.status_code == 400

    wrong = await client.put(
        f"/api/users/{alice.id}/password",
        json={"current_password": "nope-nope", "new_password": "brand-new"},
        headers=alice.headers,
    )
    assert wrong.status_code == 401

    ok = await client.put(
        f"/api/users/{alice.id}/password",
        json={"current_password": factory.password, "new_password": "brand-new"},
        headers=alice.headers,
    )
    assert ok.status_code == 200

    login = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "brand-new"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_admin_resets_password_and_others_cannot(client, admin, alice, bob):
    denied = await client.put(
        f"/api/users/{alice.id}/password",
        json={"new_password": "taken-over"},
        headers=bob.headers,
    )
    assert denied.status_code == 403

    reset = await client.put(
        f"/api/users/{alice.id}/password",
        json={"new_password": "reset-by-admin"},
        headers=admin.headers,
    )
    assert reset.status_code == 200
    login = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "reset-by-admin"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_deleting_user_removes_requests_and_releases_pets(
    client, admin, alice, factory, application_payload
):
    pet = await factory.pet()
    created = await client.post(
        "/api/adoptions",
        json={"pet_id": str(pet.id), "application": application_payload},
        headers=alice.headers,
    )
    adoption_id = created.json()["data"]["id"]
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.PENDING

    denied = await client.delete(f"/api/users/{alice.id}", headers=alice.headers)
    assert denied.status_code == 403

    response = await client.delete(f"/api/users/{alice.id}", headers=admin.headers)
    assert response.status_code == 200
    assert await factory.load_adoption(adoption_id) is None
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.AVAILABLE

    gone = await client.get(f"/api/users/{alice.id}", headers=admin.headers)
    assert gone.status_code == 404
