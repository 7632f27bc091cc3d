"""Integration-test fixtures.

The app runs in-process behind ASGITransport. The hosted marketplace is a
FakeMarketplace served through httpx.MockTransport, wired in with
app.dependency_overrides, so the real MarketplaceClient and mappers are
exercised end to end. Tax runs enabled without a provider (manual VAT table).
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.sf_marketplace.api.dependencies import get_marketplace_client
from src.sf_marketplace.infrastructure.client import MarketplaceClient
from src.sf_tax.api.dependencies import get_tax_resolver
from src.sf_tax.application.resolver import TaxResolver
from tests.documents import STOCK, listing_resource, transaction_document

TRUSTED_TOKEN = "trusted-token"
COMMISSION_PATH = "/latest/transactions/commission.json"
COMMISSION_ASSET = {
    "data": {
        "type": "jsonAsset",
        "attributes": {
            "data": {
                "providerCommission": {"percentage": 10},
                "customerCommission": {"percentage": 5},
            }
        },
    }
}


class FakeMarketplace:
    """Canned Marketplace API; records every transaction command and token exchange."""

    def __init__(self) -> None:
        self.listings = {
            "listing-1": listing_resource(
                shippingEnabled=True, shippingPriceInSubunitsOneItem=700
            ),
            "listing-2": listing_resource("listing-2", 5000, shippingEnabled=True),
        }
        self.transactions = {"tx-1": transaction_document()}
        self.commands: list[dict] = []
        self.tokens: list[str | None] = []
        self.exchanged: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.tokens.append(request.headers.get("authorization"))
        path = request.url.path
        params = request.url.params

        if path == "/v1/auth/token":
            form = parse_qs(request.content.decode())
            self.exchanged.append(form["subject_token"][0])
            return httpx.Response(200, json={"access_token": TRUSTED_TOKEN, "token_type": "bearer"})
        if path.endswith(COMMISSION_PATH):
            return httpx.Response(200, json=COMMISSION_ASSET)
        if path in ("/v1/api/listings/show", "/v1/api/own_listings/show"):
            listing = self.listings.get(params["id"])
            if listing is None:
                return httpx.Response(404, json={"errors": [{"status": 404}]})
            return httpx.Response(200, json={"data": listing, "included": [STOCK]})
        if path == "/v1/api/listings/query":
            ids = params["ids"].split(",")
            return httpx.Response(200, json={"data": [self.listings[i] for i in ids if i in self.listings]})
        if path == "/v1/api/transactions/show":
            document = self.transactions.get(params["id"])
            if document is None:
                return httpx.Response(404, json={"errors": [{"status": 404}]})
            return httpx.Response(200, json=document)
        if path.startswith("/v1/api/transactions/"):
            body = json.loads(request.content)
            self.commands.append(
                {
                    "command": path.rsplit("/", 1)[1],
                    "body": body,
                    "auth": request.headers.get("authorization"),
                }
            )
            return httpx.Response(200, json={"data": {"id": body.get("id", "tx-new"), "type": "transaction"}})
        return httpx.Response(404)

    @property
    def last_command(self) -> dict:
        return self.commands[-1]


@pytest.fixture
def marketplace() -> FakeMarketplace:
    return FakeMarketplace()


@pytest_asyncio.fixture
async def client(marketplace: FakeMarketplace) -> AsyncClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(marketplace.handler))

    async def _marketplace_client() -> MarketplaceClient:
        return MarketplaceClient(
            http=http,
            base_url="https://flex.test",
            assets_url="https://cdn.test",
            client_id="client-123",
            commission_asset_path=COMMISSION_PATH,
            client_secret="secret-456",
        )

    async def _tax_resolver() -> TaxResolver:
        return TaxResolver(enabled=True)

    app.dependency_overrides[get_marketplace_client] = _marketplace_client
    app.dependency_overrides[get_tax_resolver] = _tax_resolver
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await http.aclose()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer user-token"}
