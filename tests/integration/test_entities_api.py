"""Integration tests for the gated entity CRUD APIs."""

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def manager_headers(client: AsyncClient, admin_headers, make_user):
    """A Manager who can edit customers and only view vendors."""
    await client.post("/api/admin/roles", json={"name": "Manager"}, headers=admin_headers)
    await client.put(
        "/api/admin/roles/Manager/permissions",
        json={
            "permissions": [
                {"feature_name": "Customers", "feature_path": "/dashboard/customers", "access_level": "edit"},
                {"feature_name": "Vendors", "feature_path": "/dashboard/vendors", "access_level": "view"},
            ]
        },
        headers=admin_headers,
    )
    _, token = await make_user("manager@ledgerly.test", role="Manager")
    return _bearer(token)


@pytest.mark.asyncio
async def test_customer_crud(client: AsyncClient, admin_headers):
    created = await client.post(
        "/api/customers",
        json={"name": "Acme Corp", "email": "ap@acme.com", "city": "Springfield"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    customer = created.json()
    assert customer["status"] == "active"
    assert customer["phone"] == ""

    updated = await client.put(
        f"/api/customers/{customer['id']}",
        json={"status": "inactive", "phone": "555-0100"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "inactive"
    assert updated.json()["name"] == "Acme Corp"

    listing = await client.get("/api/customers", headers=admin_headers)
    assert [c["name"] for c in listing.json()] == ["Acme Corp"]

    deleted = await client.delete(f"/api/customers/{customer['id']}", headers=admin_headers)
    assert deleted.status_code == 204

    missing = await client.get(f"/api/customers/{customer['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Customer not found"


@pytest.mark.asyncio
async def test_customer_requires_name(client: AsyncClient, admin_headers):
    response = await client.post("/api/customers", json={"email": "x@y.com"}, headers=admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_view_only_user_cannot_write(client: AsyncClient, user_headers):
    """The default User role reads entity pages but cannot change them."""
    listing = await client.get("/api/products", headers=user_headers)
    assert listing.status_code == 200

    response = await client.post(
        "/api/products",
        json={"name": "Widget", "price": "9.99"},
        headers=user_headers,
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Edit access to Products required"


@pytest.mark.asyncio
async def test_custom_role_gating(client: AsyncClient, manager_headers):
    created = await client.post("/api/customers", json={"name": "Globex"}, headers=manager_headers)
    assert created.status_code == 201

    vendors = await client.get("/api/vendors", headers=manager_headers)
    assert vendors.status_code == 200

    new_vendor = await client.post("/api/vendors", json={"name": "Initech"}, headers=manager_headers)
    assert new_vendor.status_code == 403

    expenses = await client.get("/api/expenses", headers=manager_headers)
    assert expenses.status_code == 403
    assert expenses.json()["detail"] == "View access to Expenses required"


@pytest.mark.asyncio
async def test_deleted_role_loses_access(client: AsyncClient, admin_headers, manager_headers):
    await client.delete("/api/admin/roles/Manager", headers=admin_headers)

    response = await client.get("/api/customers", headers=manager_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_expense_and_transaction_ordering(client: AsyncClient, admin_headers):
    for day, amount in (("2026-01-05", "40.00"), ("2026-02-10", "120.50")):
        response = await client.post(
            "/api/expenses",
            json={"date": day, "amount": amount, "vendor_name": "Staples", "category": "Office"},
            headers=admin_headers,
        )
        assert response.status_code == 201

    expenses = (await client.get("/api/expenses", headers=admin_headers)).json()
    assert [e["date"] for e in expenses] == ["2026-02-10", "2026-01-05"]
    assert Decimal(expenses[0]["amount"]) == Decimal("120.50")

    transaction = await client.post(
        "/api/transactions",
        json={"date": "2026-02-11", "type": "income", "amount": "500", "description": "Retainer"},
        headers=admin_headers,
    )
    assert transaction.status_code == 201
    assert transaction.json()["type"] == "income"

    bad_type = await client.post(
        "/api/transactions",
        json={"date": "2026-02-11", "type": "gift", "amount": "5"},
        headers=admin_headers,
    )
    assert bad_type.status_code == 400
