"""Integration tests for the /permissions API."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_user_permission_list(client: AsyncClient, user_headers):
    response = await client.get("/api/permissions", headers=user_headers)

    assert response.status_code == 200
    features = response.json()
    assert [f["page_name"] for f in features][:3] == ["Dashboard", "Customers", "Products"]
    levels = {f["page_path"]: f["access_level"] for f in features}
    assert levels["/dashboard/invoices"] == "view"
    assert levels["/dashboard/admin"] == "none"


@pytest.mark.asyncio
async def test_role_without_rows_gets_empty_list(client: AsyncClient, make_user):
    _, token = await make_user("orphan@ledgerly.test", role="Intern")

    response = await client.get("/api/permissions", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_check_view_only_page(client: AsyncClient, user_headers):
    response = await client.get(
        "/api/permissions/check",
        params={"path": "/dashboard/invoices"},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "page_path": "/dashboard/invoices",
        "page_name": "Invoices",
        "has_access": True,
        "can_view": True,
        "can_edit": False,
        "access_level": "view",
        "redirect_to": None,
    }


@pytest.mark.asyncio
async def test_check_denied_page_redirects(client: AsyncClient, user_headers):
    response = await client.get(
        "/api/permissions/check",
        params={"path": "/dashboard/admin"},
        headers=user_headers,
    )

    data = response.json()
    assert data["has_access"] is False
    assert data["redirect_to"] == "/dashboard"


@pytest.mark.asyncio
async def test_check_unknown_path(client: AsyncClient, user_headers):
    response = await client.get(
        "/api/permissions/check",
        params={"path": "/dashboard/payroll"},
        headers=user_headers,
    )

    data = response.json()
    assert data["page_name"] is None
    assert data["has_access"] is False


@pytest.mark.asyncio
async def test_admin_check_any_path(client: AsyncClient, admin_headers):
    response = await client.get(
        "/api/permissions/check",
        params={"path": "/dashboard/payroll"},
        headers=admin_headers,
    )

    assert response.json()["can_edit"] is True


@pytest.mark.asyncio
async def test_check_requires_path(client: AsyncClient, user_headers):
    response = await client.get("/api/permissions/check", headers=user_headers)
    assert response.status_code == 400
