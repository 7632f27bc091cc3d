"""PricingApplicationService — prices a listing or cart without submitting anything.

Listings and commission come from the hosted marketplace; the line item
builder does the arithmetic.
"""

import logging

from src.sf_common.enums import DeliveryMethod
from src.sf_common.errors import DeliveryMethodUnavailableError
from src.sf_marketplace.domain.client import MarketplaceClientProtocol
from src.sf_pricing.application.schemas import LineItemsRequest, LineItemsResponse, OrderDataIn
from src.sf_pricing.domain.line_items import transaction_line_items
from src.sf_pricing.domain.models import Listing
from src.sf_pricing.domain.shipping import is_delivery_method_available

logger = logging.getLogger(__name__)


def ensure_delivery_method(listings: list[Listing], method: DeliveryMethod) -> None:
    if method == DeliveryMethod.NONE:
        return
    if not is_delivery_method_available(listings, method):
        raise DeliveryMethodUnavailableError(method.value)


async def fetch_cart_listings(
    marketplace: MarketplaceClientProtocol,
    main_listing_id: str,
    order_data: OrderDataIn,
    token: str | None,
) -> list[Listing]:
    ids = [item.id for item in order_data.cart_items if item.id and item.id != main_listing_id]
    if not ids:
        return []
    return await marketplace.query_listings(list(dict.fromkeys(ids)), token)


class PricingApplicationService:
    def __init__(
        self,
        marketplace: MarketplaceClientProtocol,
        *,
        art_levy_bps: int | None = None,
        default_unit_type: str = "item",
    ) -> None:
        self._marketplace = marketplace
        self._art_levy_bps = art_levy_bps
        self._default_unit_type = default_unit_type

    async def line_items(self, req: LineItemsRequest, token: str | None) -> LineItemsResponse:
        listing = await self._marketplace.show_listing(
            req.listing_id, token, own=req.is_own_listing
        )
        cart_listings = await fetch_cart_listings(
            self._marketplace, listing.id, req.order_data, token
        )
        commission = await self._marketplace.fetch_commission()

        ensure_delivery_method([listing, *cart_listings], req.order_data.delivery_method)
        order = req.order_data.to_domain(
            unit_type=req.order_data.unit_type or self._default_unit_type
        )
        items = transaction_line_items(
            listing,
            order,
            commission,
            cart_listings=cart_listings,
            art_levy_bps=self._art_levy_bps,
        )
        logger.debug("Priced listing %s with %d cart listings", listing.id, len(cart_listings))
        return LineItemsResponse.from_line_items(items)
