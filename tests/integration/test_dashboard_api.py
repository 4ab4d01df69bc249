"""Integration tests for the /dashboard API."""

from decimal import Decimal

import pytest
from httpx import AsyncClient


async def _invoice(client, headers, number, day, status, customer_id=None):
    response = await client.post(
        "/api/invoices",
        json={
            "invoice_number": number,
            "customer_id": customer_id,
            "date": day,
            "due_date": day,
            "status": status,
            "items": [{"description": "Services", "quantity": "1", "rate": "100"}],
        },
        headers=headers,
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, admin_headers):
    customer = await client.post("/api/customers", json={"name": "Acme"}, headers=admin_headers)
    customer_id = customer.json()["id"]
    await _invoice(client, admin_headers, "INV-1", "2026-01-10", "paid", customer_id)
    await _invoice(client, admin_headers, "INV-2", "2026-01-20", "paid", customer_id)
    await _invoice(client, admin_headers, "INV-3", "2026-02-01", "sent", customer_id)
    await _invoice(client, admin_headers, "INV-4", "2026-02-02", "draft")
    await client.post(
        "/api/expenses",
        json={"date": "2026-01-15", "amount": "80.00", "vendor_name": "Staples"},
        headers=admin_headers,
    )

    response = await client.get("/api/dashboard/stats", headers=admin_headers)

    assert response.status_code == 200
    stats = response.json()
    assert Decimal(stats["revenue"]) == Decimal("228.00")
    assert Decimal(stats["expenses"]) == Decimal("80.00")
    assert Decimal(stats["profit"]) == Decimal("148.00")
    assert stats["customers"] == 1
    assert stats["pending_invoices"] == 1


@pytest.mark.asyncio
async def test_stats_empty(client: AsyncClient, user_headers):
    response = await client.get("/api/dashboard/stats", headers=user_headers)

    assert response.status_code == 200
    stats = response.json()
    assert Decimal(stats["revenue"]) == Decimal("0")
    assert stats["customers"] == 0


@pytest.mark.asyncio
async def test_recent_activity(client: AsyncClient, admin_headers):
    await _invoice(client, admin_headers, "INV-OLD", "2026-01-01", "sent")
    await _invoice(client, admin_headers, "INV-NEW", "2026-03-01", "draft")
    await client.post(
        "/api/expenses",
        json={"date": "2026-02-01", "amount": "15.00", "description": "Paper"},
        headers=admin_headers,
    )

    response = await client.get("/api/dashboard/activity", headers=admin_headers)

    assert response.status_code == 200
    activity = response.json()
    assert [item["reference"] for item in activity] == ["INV-NEW", "Paper", "INV-OLD"]
    assert activity[0]["entity"] == "Unknown customer"
    assert activity[1]["type"] == "expense"
    assert activity[1]["entity"] == "No vendor"


@pytest.mark.asyncio
async def test_dashboard_denied_without_rows(client: AsyncClient, make_user):
    _, token = await make_user("intern@ledgerly.test", role="Intern")

    response = await client.get(
        "/api/dashboard/stats",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 403
