"""Integration tests for the /auth API."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ledgerly.infrastructure.persistence.models import UserModel


@pytest.mark.asyncio
async def test_register_returns_token_and_snapshot(client: AsyncClient):
    response = await client.post(
        "/api/auth/register",
        json={
            "email": "owner@example.com",
            "password": "Ledger!2024",
            "company_name": "Acme Books",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["expires_in"] == 7 * 24 * 3600
    assert data["user"]["email"] == "owner@example.com"
    assert data["user"]["role"] == "User"
    assert data["user"]["company_name"] == "Acme Books"

    levels = {p["page_name"]: p["access_level"] for p in data["permissions"]}
    assert levels["Invoices"] == "view"
    assert levels["Admin Panel"] == "none"


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, make_user):
    await make_user("dup@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"email": "Dup@example.com", "password": "Ledger!2024"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


@pytest.mark.asyncio
async def test_register_invalid_email(client: AsyncClient):
    response = await client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "Ledger!2024"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


@pytest.mark.asyncio
async def test_login_flow(client: AsyncClient, db_session, make_user):
    """Login returns a usable token and records last_login."""
    await make_user("login@ledgerly.test", role="Admin")

    response = await client.post(
        "/api/auth/login",
        json={"email": "LOGIN@ledgerly.test", "password": "Ledger!2024"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["role"] == "Admin"
    assert len(data["permissions"]) == 9
    assert {p["access_level"] for p in data["permissions"]} == {"edit"}

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "login@ledgerly.test"

    result = await db_session.execute(
        select(UserModel).where(UserModel.email == "login@ledgerly.test")
    )
    assert result.scalar_one().last_login is not None


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, make_user):
    await make_user("wrong@ledgerly.test")

    response = await client.post(
        "/api/auth/login",
        json={"email": "wrong@ledgerly.test", "password": "nope"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    response = await client.post(
        "/api/auth/login",
        json={"email": "ghost@ledgerly.test", "password": "Ledger!2024"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_inactive_account(client: AsyncClient, make_user):
    await make_user("dormant@ledgerly.test", is_active=False)

    response = await client.post(
        "/api/auth/login",
        json={"email": "dormant@ledgerly.test", "password": "Ledger!2024"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Account is deactivated"


@pytest.mark.asyncio
async def test_logout_revokes_token(client: AsyncClient, user_headers):
    response = await client.post("/api/auth/logout", headers=user_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Logged out successfully"}

    me = await client.get("/api/auth/me", headers=user_headers)
    assert me.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    ["Bearer not-a-jwt", "Token abc", "Bearer"],
)
async def test_bad_authorization_header(client: AsyncClient, header):
    response = await client.get("/api/auth/me", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["error"] == "Authentication failed"
