"""Integration tests for the /admin/users API."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_and_list_users(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/admin/users",
        json={
            "email": "Clerk@Ledgerly.test",
            "password": "Ledger!2024",
            "first_name": "Casey",
            "role": "Manager",
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "clerk@ledgerly.test"
    assert created["role"] == "Manager"
    assert created["is_active"] is True
    assert "password_hash" not in created

    listing = await client.get("/api/admin/users", headers=admin_headers)
    assert listing.status_code == 200
    assert "clerk@ledgerly.test" in [user["email"] for user in listing.json()]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"password": "Ledger!2024"}, {"email": "nopass@ledgerly.test"}, {}],
)
async def test_create_user_requires_email_and_password(client: AsyncClient, admin_headers, payload):
    response = await client.post("/api/admin/users", json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Email and password are required"


@pytest.mark.asyncio
async def test_create_duplicate_user(client: AsyncClient, admin_headers, make_user):
    await make_user("taken@ledgerly.test")

    response = await client.post(
        "/api/admin/users",
        json={"email": "TAKEN@ledgerly.test", "password": "Ledger!2024"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


@pytest.mark.asyncio
async def test_get_user(client: AsyncClient, admin_headers, make_user):
    user_id, _ = await make_user("someone@ledgerly.test")

    response = await client.get(f"/api/admin/users/{user_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["id"] == user_id

    missing = await client.get("/api/admin/users/does-not-exist", headers=admin_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_user_role_and_password(client: AsyncClient, admin_headers, make_user):
    user_id, _ = await make_user("promote@ledgerly.test")

    response = await client.put(
        f"/api/admin/users/{user_id}",
        json={"role": "Manager", "password": "NewSecret!1"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["role"] == "Manager"

    login = await client.post(
        "/api/auth/login",
        json={"email": "promote@ledgerly.test", "password": "NewSecret!1"},
    )
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "Manager"


@pytest.mark.asyncio
async def test_update_user_without_fields(client: AsyncClient, admin_headers, make_user):
    user_id, _ = await make_user("idle@ledgerly.test")

    response = await client.put(f"/api/admin/users/{user_id}", json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "No fields to update"


@pytest.mark.asyncio
async def test_update_user_email_conflict(client: AsyncClient, admin_headers, make_user):
    await make_user("first@ledgerly.test")
    user_id, _ = await make_user("second@ledgerly.test")

    response = await client.put(
        f"/api/admin/users/{user_id}",
        json={"email": "first@ledgerly.test"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email is already in use"


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, admin_headers, make_user):
    user_id, _ = await make_user("leaving@ledgerly.test")

    response = await client.delete(f"/api/admin/users/{user_id}", headers=admin_headers)

    assert response.status_code == 204
    missing = await client.get(f"/api/admin/users/{user_id}", headers=admin_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(client: AsyncClient, make_user):
    admin_id, token = await make_user("root@ledgerly.test", role="Admin")

    response = await client.delete(
        f"/api/admin/users/{admin_id}",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete your own account"


@pytest.mark.asyncio
async def test_users_api_requires_admin(client: AsyncClient, user_headers):
    response = await client.get("/api/admin/users", headers=user_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_user_blank_email(client: AsyncClient, admin_headers, make_user):
    user_id, _ = await make_user("keep@ledgerly.test")

    response = await client.put(
        f"/api/admin/users/{user_id}",
        json={"email": "   "},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email is required"

    user = (await client.get(f"/api/admin/users/{user_id}", headers=admin_headers)).json()
    assert user["email"] == "keep@ledgerly.test"
