"""
Tests for admin provisioning of hotel operator accounts.
"""

import pytest
from httpx import AsyncClient

from venuebook.core.errors import AuthorizationError, ConflictError
from venuebook.schemas.user import HotelAccountCreate
from venuebook.services.auth_service import ensure_bootstrap_admin
from venuebook.services.provisioning_service import list_hotel_accounts, provision_hotel_account

HOTEL_FORM = {
    "full_name": "Seaside Hotel",
    "email": "seaside@example.com",
    "phone_number": "555-0300",
    "password": "hotelpassword123",
}


@pytest.mark.asyncio
async def test_admin_provisions_hotel(client: AsyncClient, admin_headers):
    response = await client.post("/api/v1/admin/hotels", json=HOTEL_FORM, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role"] == "hotel"

    response = await client.post("/api/v1/auth/login", json={
        "email": HOTEL_FORM["email"],
        "password": HOTEL_FORM["password"],
    })
    assert response.status_code == 200
    assert response.json()["role"] == "hotel"


@pytest.mark.asyncio
async def test_provision_duplicate_email(repos, admin, consumer_user):
    with pytest.raises(ConflictError):
        await provision_hotel_account(
            repos, admin, HotelAccountCreate(**{**HOTEL_FORM, "email": "guest@example.com"})
        )


@pytest.mark.asyncio
async def test_provision_duplicate_email_over_http(client: AsyncClient, admin_headers, hotel_user):
    response = await client.post(
        "/api/v1/admin/hotels",
        json={**HOTEL_FORM, "email": "hotel@example.com"},
        headers=admin_headers,
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_only_admin_provisions(repos, hotel, consumer):
    for principal in (hotel, consumer):
        with pytest.raises(AuthorizationError):
            await provision_hotel_account(repos, principal, HotelAccountCreate(**HOTEL_FORM))


@pytest.mark.asyncio
async def test_consumer_cannot_reach_admin_routes(client: AsyncClient, consumer_headers):
    response = await client.get("/api/v1/admin/hotels", headers=consumer_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_hotels(client: AsyncClient, admin_headers, hotel_user, other_hotel_user, consumer_user):
    response = await client.get("/api/v1/admin/hotels", headers=admin_headers)
    assert response.status_code == 200
    assert {h["email"] for h in response.json()} == {"hotel@example.com", "rival@example.com"}


@pytest.mark.asyncio
async def test_deactivated_hotel_cannot_log_in(client: AsyncClient, admin_headers, hotel_user, hotel_headers):
    response = await client.post(
        f"/api/v1/admin/hotels/{hotel_user.id}/deactivate", headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = await client.post("/api/v1/auth/login", json={
        "email": "hotel@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 403

    # tokens issued before deactivation stop working too
    response = await client.get("/api/v1/hotel/events", headers=hotel_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_deactivate_non_hotel(client: AsyncClient, admin_headers, consumer_user):
    response = await client.post(
        f"/api/v1/admin/hotels/{consumer_user.id}/deactivate", headers=admin_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bootstrap_admin_created_once(repos):
    first = await ensure_bootstrap_admin(repos, "root@example.com", "rootpassword123")
    second = await ensure_bootstrap_admin(repos, "root@example.com", "rootpassword123")
    assert first.id == second.id
    assert first.role == "admin"


@pytest.mark.asyncio
async def test_bootstrap_admin_skipped_when_unset(repos):
    assert await ensure_bootstrap_admin(repos, None, None) is None


@pytest.mark.asyncio
async def test_provisioning_race_on_same_email_is_a_conflict(repos, admin, monkeypatch):
    """A second request that passed the lookup before the first insert landed gets a conflict."""
    form = HotelAccountCreate(**HOTEL_FORM)
    first = await provision_hotel_account(repos, admin, form)

    async def lookup_before_first_insert(email):
        return None

    monkeypatch.setattr(repos.profiles, "get_by_email", lookup_before_first_insert)

    with pytest.raises(ConflictError):
        await provision_hotel_account(repos, admin, form)

    hotels = await list_hotel_accounts(repos, admin)
    assert [h.id for h in hotels] == [first.id]


@pytest.mark.asyncio
async def test_email_change_to_taken_address_is_a_conflict(repos, consumer_user, hotel_user):
    """The store rejects it even when the service-level lookup is skipped."""
    with pytest.raises(ConflictError):
        await repos.profiles.update_fields(consumer_user.id, {"email": "hotel@example.com"})

    unchanged = await repos.profiles.get(consumer_user.id)
    assert unchanged.email == "guest@example.com"
