"""Integration tests for POST /api/v1/calculate-tax (manual VAT table, no provider)."""

import pytest

pytestmark = pytest.mark.asyncio

URL = "/api/v1/calculate-tax"


async def test_manual_vat(client):
    resp = await client.post(URL, json={
        "orderTotal": 10000,
        "shippingTotal": 700,
        "shippingAddress": {"country": "no", "postalCode": "0150"},
        "currency": "nok",
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["taxAmount"] == 2675
    assert data["taxRate"] == 25.0
    assert data["taxEnabled"] is True
    assert data["isManualCalculation"] is True


async def test_unknown_country_is_zero(client):
    resp = await client.post(URL, json={
        "orderTotal": 10000,
        "shippingAddress": {"country": "XX"},
        "currency": "NOK",
    })
    assert resp.json()["data"]["taxAmount"] == 0


async def test_address_required(client):
    resp = await client.post(URL, json={"orderTotal": 10000, "currency": "NOK"})
    assert resp.status_code == 400
    assert resp.json()["code"] == 4002


async def test_currency_required(client):
    resp = await client.post(URL, json={"orderTotal": 10000, "shippingAddress": {"country": "NO"}})
    assert resp.status_code == 400
    assert resp.json()["code"] == 4003


async def test_negative_totals_rejected(client):
    resp = await client.post(URL, json={
        "orderTotal": -1,
        "shippingAddress": {"country": "NO"},
        "currency": "NOK",
    })
    assert resp.status_code == 422
