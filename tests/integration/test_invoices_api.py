"""Integration tests for the /invoices API."""

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient

LINES = [
    {"description": "Consulting", "quantity": "2", "rate": "50"},
    {"description": "Setup", "quantity": "1", "rate": "100"},
    {"description": "   ", "quantity": "3", "rate": "10"},
]


@pytest_asyncio.fixture
async def customer_id(client: AsyncClient, admin_headers) -> int:
    response = await client.post("/api/customers", json={"name": "Acme Corp"}, headers=admin_headers)
    return response.json()["id"]


async def _create(client, headers, **overrides):
    payload = {
        "date": "2026-03-01",
        "due_date": "2026-03-31",
        "items": LINES,
        **overrides,
    }
    return await client.post("/api/invoices", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_create_invoice_computes_totals(client: AsyncClient, admin_headers, customer_id):
    """Totals are computed server-side at 14%; blank lines are dropped."""
    response = await _create(client, admin_headers, customer_id=customer_id)

    assert response.status_code == 201
    invoice = response.json()
    assert invoice["invoice_number"].startswith("INV-")
    assert invoice["status"] == "draft"
    assert invoice["customer_name"] == "Acme Corp"
    assert Decimal(invoice["subtotal"]) == Decimal("200.00")
    assert Decimal(invoice["tax"]) == Decimal("28.00")
    assert Decimal(invoice["total"]) == Decimal("228.00")
    assert [item["description"] for item in invoice["items"]] == ["Consulting", "Setup"]
    assert [Decimal(item["amount"]) for item in invoice["items"]] == [Decimal("100"), Decimal("100")]


@pytest.mark.asyncio
async def test_client_totals_are_ignored(client: AsyncClient, admin_headers):
    response = await _create(
        client,
        admin_headers,
        invoice_number="INV-TAMPER",
        subtotal="1.00",
        total="1.00",
    )

    assert Decimal(response.json()["total"]) == Decimal("228.00")


@pytest.mark.asyncio
async def test_empty_invoice(client: AsyncClient, admin_headers):
    response = await _create(client, admin_headers, items=[])

    assert response.status_code == 201
    assert Decimal(response.json()["total"]) == Decimal("0")
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_duplicate_invoice_number(client: AsyncClient, admin_headers):
    await _create(client, admin_headers, invoice_number="INV-1001")

    response = await _create(client, admin_headers, invoice_number="INV-1001")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invoice number 'INV-1001' already exists"


@pytest.mark.asyncio
async def test_unknown_customer(client: AsyncClient, admin_headers):
    response = await _create(client, admin_headers, customer_id=9999)

    assert response.status_code == 400
    assert response.json()["detail"] == "Customer not found"


@pytest.mark.asyncio
async def test_update_replaces_items(client: AsyncClient, admin_headers):
    invoice = (await _create(client, admin_headers)).json()

    response = await client.put(
        f"/api/invoices/{invoice['id']}",
        json={
            "notes": "Revised",
            "items": [{"description": "Audit", "quantity": "4", "rate": "25"}],
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["notes"] == "Revised"
    assert [item["description"] for item in updated["items"]] == ["Audit"]
    assert Decimal(updated["total"]) == Decimal("114.00")


@pytest.mark.asyncio
async def test_update_header_keeps_items(client: AsyncClient, admin_headers):
    invoice = (await _create(client, admin_headers)).json()

    response = await client.put(
        f"/api/invoices/{invoice['id']}",
        json={"due_date": "2026-04-15"},
        headers=admin_headers,
    )

    assert response.json()["due_date"] == "2026-04-15"
    assert len(response.json()["items"]) == 2


@pytest.mark.asyncio
async def test_mark_paid_and_filter(client: AsyncClient, admin_headers):
    first = (await _create(client, admin_headers, invoice_number="INV-1")).json()
    await _create(client, admin_headers, invoice_number="INV-2")

    response = await client.patch(
        f"/api/invoices/{first['id']}/status",
        json={"status": "paid"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "paid"

    paid = await client.get("/api/invoices", params={"status": "paid"}, headers=admin_headers)
    assert [i["invoice_number"] for i in paid.json()] == ["INV-1"]

    everything = await client.get("/api/invoices", headers=admin_headers)
    assert len(everything.json()) == 2


@pytest.mark.asyncio
async def test_invalid_status(client: AsyncClient, admin_headers):
    invoice = (await _create(client, admin_headers)).json()

    response = await client.patch(
        f"/api/invoices/{invoice['id']}/status",
        json={"status": "void"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_invoice(client: AsyncClient, admin_headers):
    invoice = (await _create(client, admin_headers)).json()

    response = await client.delete(f"/api/invoices/{invoice['id']}", headers=admin_headers)
    assert response.status_code == 204

    missing = await client.get(f"/api/invoices/{invoice['id']}", headers=admin_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_preview_totals(client: AsyncClient, user_headers):
    response = await client.post("/api/invoices/preview", json=LINES, headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["tax_rate"]) == Decimal("0.14")
    assert Decimal(data["total"]) == Decimal("228.00")
    assert len(data["items"]) == 2


@pytest.mark.asyncio
async def test_view_only_user(client: AsyncClient, admin_headers, user_headers):
    """View access lists invoices but hides creation."""
    await _create(client, admin_headers)

    listing = await client.get("/api/invoices", headers=user_headers)
    assert listing.status_code == 200
    assert len(listing.json()) == 1

    response = await _create(client, user_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Edit access to Invoices required"
