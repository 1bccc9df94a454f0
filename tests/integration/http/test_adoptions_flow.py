from __future__ import annotations

import asyncio

import pytest

from petadoption.domain.value_objects.adoption_status import AdoptionStatus, PetStatus


async def request_adoption(client, who, pet_id, application_payload):
    return await client.post(
        "/api/adoptions",
        json={"pet_id": str(pet_id), "application": application_payload},
        headers=who.headers,
    )


async def set_status(client, who, adoption_id, status, comments=None):
    body = {"status": status}
    if comments is not None:
        body["admin_comments"] = comments
    return await client.put(
        f"/api/adoptions/{adoption_id}/status", json=body, headers=who.headers
    )


async def reopen_pet(client, admin, pet_id):
    response = await client.put(
        f"/api/pets/{pet_id}/status",
        json={"adoption_status": "Available"},
        headers=admin.headers,
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_request_holds_pet(client, alice, factory, application_payload):
    pet = await factory.pet()
    response = await request_adoption(client, alice, pet.id, application_payload)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "Pending"
    assert body["data"]["user_id"] == str(alice.id)
    assert body["data"]["application"]["residence_type"] == "House"

    stored = await factory.load_pet(pet.id)
    assert stored.adoption_status is PetStatus.PENDING


@pytest.mark.asyncio
async def test_create_requires_authentication(client, factory, application_payload):
    pet = await factory.pet()
    response = await client.post(
        "/api/adoptions", json={"pet_id": str(pet.id), "application": application_payload}
    )
    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_create_for_unavailable_pet_fails_and_keeps_status(
    client, alice, factory, application_payload
):
    pet = await factory.pet(adoption_status=PetStatus.ADOPTED)
    response = await request_adoption(client, alice, pet.id, application_payload)
    assert response.status_code == 400
    assert "current status: Adopted" in response.json()["message"]
    stored = await factory.load_pet(pet.id)
    assert stored.adoption_status is PetStatus.ADOPTED


@pytest.mark.asyncio
async def test_create_for_missing_pet_is_not_found(client, alice, application_payload):
    response = await request_adoption(
        client, alice, "00000000-0000-0000-0000-000000000000", application_payload
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_second_pending_request_for_same_pet_fails(
    client, alice, admin, factory, application_payload
):
    pet = await factory.pet()
    first = await request_adoption(client, alice, pet.id, application_payload)
    assert first.status_code == 201
    await reopen_pet(client, admin, pet.id)

    second = await request_adoption(client, alice, pet.id, application_payload)
    assert second.status_code == 400
    assert second.json()["message"] == "You already have a pending adoption request for this pet"


@pytest.mark.asyncio
async def test_reapplying_after_cancellation_hits_uniqueness(
    client, alice, factory, application_payload
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    cancelled = await set_status(client, alice, created["id"], "Cancelled")
    assert cancelled.status_code == 200

    again = await request_adoption(client, alice, pet.id, application_payload)
    assert again.status_code == 400
    assert again.json()["code"] == "duplicate_key"
    stored = await factory.load_pet(pet.id)
    assert stored.adoption_status is PetStatus.AVAILABLE


@pytest.mark.asyncio
async def test_approval_cascades_to_pet_and_pending_siblings(
    client, admin, alice, bob, factory, application_payload
):
    carol = await factory.user("Carol", "carol@example.com")
    pet = await factory.pet()

    winner = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    await reopen_pet(client, admin, pet.id)
    loser = (await request_adoption(client, bob, pet.id, application_payload)).json()["data"]
    await reopen_pet(client, admin, pet.id)
    withdrawn = (await request_adoption(client, carol, pet.id, application_payload)).json()["data"]
    assert (await set_status(client, carol, withdrawn["id"], "Cancelled")).status_code == 200
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.PENDING

    response = await set_status(client, admin, winner["id"], "Approved", "Welcome home")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "Approved"
    assert data["admin_comments"] == "Welcome home"
    assert data["decision_date"] is not None

    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.ADOPTED
    rejected = await factory.load_adoption(loser["id"])
    assert rejected.status is AdoptionStatus.REJECTED
    assert rejected.admin_comments == "Pet was adopted by another user"
    assert rejected.decision_date is not None
    untouched = await factory.load_adoption(withdrawn["id"])
    assert untouched.status is AdoptionStatus.CANCELLED
    assert untouched.admin_comments is None

    # The rejected sibling can no longer be approved
    second = await set_status(client, admin, loser["id"], "Approved")
    assert second.status_code == 400
    assert second.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_rejecting_last_pending_request_releases_pet(
    client, admin, alice, factory, application_payload
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    response = await set_status(client, admin, created["id"], "Rejected", "Not a match")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Rejected"
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.AVAILABLE


@pytest.mark.asyncio
async def test_rejecting_one_of_two_keeps_pet_pending(
    client, admin, alice, bob, factory, application_payload
):
    pet = await factory.pet()
    first = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    await reopen_pet(client, admin, pet.id)
    assert (await request_adoption(client, bob, pet.id, application_payload)).status_code == 201

    response = await set_status(client, admin, first["id"], "Rejected")
    assert response.status_code == 200
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["Approved", "Rejected"])
async def test_non_admin_cannot_approve_or_reject(
    client, alice, factory, application_payload, status
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    response = await set_status(client, alice, created["id"], status)
    assert response.status_code == 403
    assert (await factory.load_adoption(created["id"])).status is AdoptionStatus.PENDING


@pytest.mark.asyncio
async def test_owner_can_cancel_but_stranger_cannot(
    client, alice, bob, factory, application_payload
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    assert (await set_status(client, bob, created["id"], "Cancelled")).status_code == 403

    response = await set_status(client, alice, created["id"], "Cancelled")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Cancelled"
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.AVAILABLE


@pytest.mark.asyncio
async def test_invalid_status_value(client, admin, alice, factory, application_payload):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    response = await set_status(client, admin, created["id"], "Finished")
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "validation_error"
    assert body["message"] == "Please provide a valid status"


@pytest.mark.asyncio
async def test_terminal_request_cannot_be_reopened(
    client, admin, alice, factory, application_payload
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    assert (await set_status(client, admin, created["id"], "Rejected")).status_code == 200

    response = await set_status(client, admin, created["id"], "Pending")
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_stranger_cannot_change_status_of_someone_elses_request(
    client, admin, alice, bob, factory, application_payload
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    assert (await set_status(client, admin, created["id"], "Approved")).status_code == 200

    response = await set_status(client, bob, created["id"], "Pending")
    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "forbidden"
    assert "approved" not in body["message"].lower()


@pytest.mark.asyncio
async def test_concurrent_approvals_for_one_pet_let_a_single_request_win(
    client, admin, alice, bob, factory, application_payload
):
    pet = await factory.pet()
    first = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]
    await reopen_pet(client, admin, pet.id)
    second = (await request_adoption(client, bob, pet.id, application_payload)).json()["data"]

    responses = await asyncio.gather(
        set_status(client, admin, first["id"], "Approved"),
        set_status(client, admin, second["id"], "Approved"),
    )
    codes = sorted(response.status_code for response in responses)
    assert codes[0] == 200
    assert codes[1] in (400, 409)

    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.ADOPTED
    statuses = sorted(
        [
            (await factory.load_adoption(first["id"])).status.value,
            (await factory.load_adoption(second["id"])).status.value,
        ]
    )
    assert statuses == ["Approved", "Rejected"]


@pytest.mark.asyncio
async def test_read_is_limited_to_owner_and_admin(
    client, admin, alice, bob, factory, application_payload
):
    pet = await factory.pet(name="Milo")
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]

    forbidden = await client.get(f"/api/adoptions/{created['id']}", headers=bob.headers)
    assert forbidden.status_code == 403

    for who in (alice, admin):
        response = await client.get(f"/api/adoptions/{created['id']}", headers=who.headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["pet"]["name"] == "Milo"
        assert data["user"]["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_listing_is_role_scoped(client, admin, alice, bob, factory, application_payload):
    first = await factory.pet(name="One")
    second = await factory.pet(name="Two")
    assert (await request_adoption(client, alice, first.id, application_payload)).status_code == 201
    assert (await request_adoption(client, bob, second.id, application_payload)).status_code == 201

    mine = (await client.get("/api/adoptions", headers=alice.headers)).json()
    assert mine["count"] == 1
    assert mine["data"][0]["pet"]["name"] == "One"

    everything = (await client.get("/api/adoptions", headers=admin.headers)).json()
    assert everything["count"] == 2

    paged = (await client.get("/api/adoptions?page=1&limit=1", headers=admin.headers)).json()
    assert paged["count"] == 1
    assert paged["pagination"] == {"next": {"page": 2, "limit": 1}}


@pytest.mark.asyncio
async def test_history_and_pet_listing(client, admin, alice, factory, application_payload):
    pet = await factory.pet()
    assert (await request_adoption(client, alice, pet.id, application_payload)).status_code == 201

    history = await client.get("/api/adoptions/history", headers=alice.headers)
    assert history.status_code == 200
    assert history.json()["count"] == 1

    denied = await client.get(f"/api/adoptions/pet/{pet.id}", headers=alice.headers)
    assert denied.status_code == 403

    for_pet = await client.get(f"/api/adoptions/pet/{pet.id}", headers=admin.headers)
    assert for_pet.status_code == 200
    assert for_pet.json()["data"][0]["user"]["name"] == "Alice"


@pytest.mark.asyncio
async def test_admin_delete_of_pending_request_releases_pet(
    client, admin, alice, factory, application_payload
):
    pet = await factory.pet()
    created = (await request_adoption(client, alice, pet.id, application_payload)).json()["data"]

    denied = await client.delete(f"/api/adoptions/{created['id']}", headers=alice.headers)
    assert denied.status_code == 403

    response = await client.delete(f"/api/adoptions/{created['id']}", headers=admin.headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Adoption request deleted",
        "data": {},
    }
    assert await factory.load_adoption(created["id"]) is None
    assert (await factory.load_pet(pet.id)).adoption_status is PetStatus.AVAILABLE
