"""MarketplaceClientProtocol — abstract access to the hosted marketplace API.

Reads made on behalf of a user carry that user's bearer token; the hosted
platform does the authorization. initiate/transition exchange the caller's
token for a trusted one before submitting.
"""

from typing import Any, Protocol

from src.sf_marketplace.domain.models import MarketplaceResponse, MarketplaceTransaction
from src.sf_pricing.domain.models import CommissionRates, Listing


class MarketplaceClientProtocol(Protocol):
    async def show_listing(
        self, listing_id: str, token: str | None = None, *, own: bool = False
    ) -> Listing: ...

    async def query_listings(
        self, listing_ids: list[str], token: str | None = None
    ) -> list[Listing]: ...

    async def fetch_commission(self) -> CommissionRates: ...

    async def show_transaction(self, transaction_id: str, token: str) -> MarketplaceTransaction: ...

    async def initiate(
        self,
        body: dict[str, Any],
        token: str,
        *,
        speculative: bool = False,
        query: dict[str, Any] | None = None,
    ) -> MarketplaceResponse: ...

    async def transition(
        self,
        body: dict[str, Any],
        token: str,
        *,
        speculative: bool = False,
        query: dict[str, Any] | None = None,
    ) -> MarketplaceResponse: ...
