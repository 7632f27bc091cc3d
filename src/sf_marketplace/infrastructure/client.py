"""httpx implementation of MarketplaceClientProtocol (Marketplace API, JSON)."""

import logging
from typing import Any

import httpx

from src.sf_common.errors import (
    InternalError,
    ListingNotFoundError,
    MarketplaceApiError,
    TransactionNotFoundError,
)
from src.sf_marketplace.domain.models import MarketplaceResponse, MarketplaceTransaction
from src.sf_marketplace.infrastructure.mappers import (
    commission_from_asset,
    listing_from_resource,
    transaction_from_document,
)
from src.sf_pricing.domain.models import CommissionRates, Listing

logger = logging.getLogger(__name__)


class MarketplaceClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        assets_url: str,
        client_id: str,
        commission_asset_path: str,
        client_secret: str | None = None,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._assets_url = assets_url.rstrip("/")
        self._client_id = client_id
        self._commission_asset_path = commission_asset_path
        self._client_secret = client_secret

    @staticmethod
    def _headers(token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        token: str | None,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._http.request(
                method, url, params=params, json=json, data=data, headers=self._headers(token)
            )
        except httpx.HTTPError as exc:
            logger.error("Marketplace request %s %s failed: %s", method, url, exc)
            raise MarketplaceApiError(502, str(exc)) from exc

    @staticmethod
    def _json(resp: httpx.Response) -> dict[str, Any]:
        if resp.status_code >= 400:
            raise MarketplaceApiError(resp.status_code, resp.text[:200])
        try:
            payload = resp.json()
        except ValueError as exc:
            raise MarketplaceApiError(resp.status_code, "response is not JSON") from exc
        if not isinstance(payload, dict):
            raise MarketplaceApiError(resp.status_code, "response is not an object")
        return payload

    # --- listings ---

    async def show_listing(
        self, listing_id: str, token: str | None = None, *, own: bool = False
    ) -> Listing:
        resource = "own_listings" if own else "listings"
        resp = await self._request(
            "GET",
            f"{self._base_url}/v1/api/{resource}/show",
            token,
            params={"id": listing_id, "include": "currentStock"},
        )
        if resp.status_code == 404:
            raise ListingNotFoundError(listing_id)
        doc = self._json(resp)
        return listing_from_resource(doc.get("data") or {}, doc.get("included"))

    async def query_listings(
        self, listing_ids: list[str], token: str | None = None
    ) -> list[Listing]:
        if not listing_ids:
            return []
        resp = await self._request(
            "GET",
            f"{self._base_url}/v1/api/listings/query",
            token,
            params={"ids": ",".join(listing_ids), "include": "currentStock"},
        )
        doc = self._json(resp)
        included = doc.get("included")
        return [listing_from_resource(r, included) for r in doc.get("data") or []]

    async def fetch_commission(self) -> CommissionRates:
        url = f"{self._assets_url}/{self._client_id}{self._commission_asset_path}"
        resp = await self._request("GET", url, None)
        if resp.status_code == 404:
            logger.warning("Commission asset not found at %s; no commission applied", url)
            return CommissionRates()
        return commission_from_asset(self._json(resp))

    # --- auth ---

    async def exchange_token(self, token: str) -> str:
        """Trade the caller's access token for a trusted one (client secret required).

        Privileged transitions are only accepted by the platform with a
        trusted token; reads keep using the caller's own token.
        """
        if not self._client_secret:
            raise InternalError("MARKETPLACE_CLIENT_SECRET is not configured")
        resp = await self._request(
            "POST",
            f"{self._base_url}/v1/auth/token",
            None,
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "grant_type": "token_exchange",
                "scope": "trusted:user",
                "subject_token": token,
            },
        )
        access_token = self._json(resp).get("access_token")
        if not access_token:
            raise MarketplaceApiError(resp.status_code, "token exchange returned no access_token")
        return str(access_token)

    # --- transactions ---

    async def show_transaction(self, transaction_id: str, token: str) -> MarketplaceTransaction:
        resp = await self._request(
            "GET",
            f"{self._base_url}/v1/api/transactions/show",
            token,
            params={"id": transaction_id, "include": "listing,listing.currentStock"},
        )
        if resp.status_code == 404:
            raise TransactionNotFoundError(transaction_id)
        return transaction_from_document(self._json(resp))

    async def _command(
        self,
        command: str,
        body: dict[str, Any],
        token: str,
        query: dict[str, Any] | None,
    ) -> MarketplaceResponse:
        trusted_token = await self.exchange_token(token)
        resp = await self._request(
            "POST",
            f"{self._base_url}/v1/api/transactions/{command}",
            trusted_token,
            params=query,
            json=body,
        )
        return MarketplaceResponse(status=resp.status_code, data=self._json(resp))

    async def initiate(
        self,
        body: dict[str, Any],
        token: str,
        *,
        speculative: bool = False,
        query: dict[str, Any] | None = None,
    ) -> MarketplaceResponse:
        command = "initiate_speculative" if speculative else "initiate"
        return await self._command(command, body, token, query)

    async def transition(
        self,
        body: dict[str, Any],
        token: str,
        *,
        speculative: bool = False,
        query: dict[str, Any] | None = None,
    ) -> MarketplaceResponse:
        command = "transition_speculative" if speculative else "transition"
        return await self._command(command, body, token, query)
