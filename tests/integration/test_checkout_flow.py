"""Integration tests for privileged initiate/transition endpoints."""

import pytest

pytestmark = pytest.mark.asyncio

INITIATE = "/api/v1/initiate-privileged"
TRANSITION = "/api/v1/transition-privileged"


def _offer_body(**order_data) -> dict:
    return {
        "orderData": {"actor": "customer", "offerInSubunits": 8000, **order_data},
        "bodyParams": {
            "transition": "transition/customer-offer",
            "processAlias": "negotiated-purchase/release-1",
            "params": {"listingId": "listing-1"},
        },
    }


class TestAuth:
    async def test_initiate_requires_token(self, client, marketplace):
        resp = await client.post(INITIATE, json=_offer_body())
        assert resp.status_code == 401
        assert marketplace.commands == []

    async def test_transition_requires_token(self, client):
        resp = await client.post(TRANSITION, json={"bodyParams": {"transition": "x", "id": "tx-1"}})
        assert resp.status_code == 401


class TestInitiate:
    async def test_customer_offer(self, client, marketplace, auth_headers):
        resp = await client.post(INITIATE, json=_offer_body(), headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == 200
        assert data["data"]["data"]["id"] == "tx-new"

        command = marketplace.last_command
        assert command["command"] == "initiate"
        params = command["body"]["params"]
        assert params["lineItems"][0]["unitPrice"] == {"amount": 8000, "currency": "NOK"}
        assert "lineTotal" not in params["lineItems"][0]
        assert params["metadata"]["offers"] == [
            {"offerInSubunits": 8000, "by": "customer", "transition": "transition/customer-offer"}
        ]
        assert marketplace.exchanged == ["user-token"]
        assert command["auth"] == "Bearer trusted-token"

    async def test_speculative_with_tax(self, client, marketplace, auth_headers):
        body = _offer_body(deliveryMethod="shipping", shippingDetails={"country": "NO"})
        body["isSpeculative"] = True
        resp = await client.post(INITIATE, json=body, headers=auth_headers)
        assert resp.status_code == 200

        command = marketplace.last_command
        assert command["command"] == "initiate_speculative"
        items = command["body"]["params"]["lineItems"]
        assert [li["code"] for li in items] == [
            "line-item/negotiatedItem",
            "line-item/shipping-fee",
            "line-item/provider-commission",
            "line-item/customer-commission",
            "line-item/tax",
        ]
        # 25% of offer + shipping
        assert items[-1]["unitPrice"]["amount"] == 2175

    async def test_provider_cannot_make_offer(self, client, marketplace, auth_headers):
        resp = await client.post(INITIATE, json=_offer_body(actor="provider"), headers=auth_headers)
        assert resp.status_code == 403
        assert resp.json()["code"] == 2003
        assert marketplace.commands == []

    async def test_unknown_listing(self, client, auth_headers):
        body = _offer_body()
        body["bodyParams"]["params"]["listingId"] = "nope"
        resp = await client.post(INITIATE, json=body, headers=auth_headers)
        assert resp.status_code == 404


class TestTransition:
    async def test_counter_offer(self, client, marketplace, auth_headers):
        resp = await client.post(TRANSITION, json={
            "orderData": {"actor": "customer", "offerInSubunits": 8500, "expectedHistoryLength": 2},
            "bodyParams": {"transition": "transition/customer-counter-offer", "id": "tx-1"},
        }, headers=auth_headers)
        assert resp.status_code == 200

        command = marketplace.last_command
        assert command["command"] == "transition"
        assert command["body"]["id"] == "tx-1"
        metadata = command["body"]["params"]["metadata"]
        assert [o["offerInSubunits"] for o in metadata["offers"]] == [8000, 9000, 8500]
        assert metadata["note"] == "kept"

    async def test_stale_history(self, client, marketplace, auth_headers):
        resp = await client.post(TRANSITION, json={
            "orderData": {"actor": "customer", "offerInSubunits": 8500, "expectedHistoryLength": 1},
            "bodyParams": {"transition": "transition/customer-counter-offer", "id": "tx-1"},
        }, headers=auth_headers)
        assert resp.status_code == 409
        assert resp.json()["code"] == 3001
        assert marketplace.commands == []

    async def test_illegal_from_current_state(self, client, auth_headers):
        resp = await client.post(TRANSITION, json={
            "orderData": {"actor": "customer"},
            "bodyParams": {"transition": "transition/request-payment", "id": "tx-1"},
        }, headers=auth_headers)
        assert resp.status_code == 409

    async def test_unknown_transaction(self, client, auth_headers):
        resp = await client.post(TRANSITION, json={
            "orderData": {"actor": "customer"},
            "bodyParams": {"transition": "transition/accept-counter-offer", "id": "tx-404"},
        }, headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["code"] == 5002

    async def test_cart_item_priced_only_from_fetched_listing(self, client, marketplace, auth_headers):
        resp = await client.post(TRANSITION, json={
            "orderData": {
                "actor": "customer",
                "offerInSubunits": 8500,
                "cartItems": [{"id": "closed-listing", "price": {"amount": 1, "currency": "NOK"}}],
            },
            "bodyParams": {"transition": "transition/customer-counter-offer", "id": "tx-1"},
        }, headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["code"] == 5001
        assert marketplace.commands == []
