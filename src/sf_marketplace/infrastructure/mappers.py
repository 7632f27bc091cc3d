"""JSON:API documents from the hosted marketplace -> domain objects."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from src.sf_common.enums import TransactionRole
from src.sf_common.errors import MarketplaceApiError
from src.sf_common.money import Money, percent_to_bps
from src.sf_marketplace.domain.models import MarketplaceTransaction
from src.sf_negotiation.domain.ledger import Offer, TransitionRecord
from src.sf_pricing.domain.models import (
    BOTH_ROLES,
    CommissionRates,
    LineItem,
    Listing,
    ShippingConfig,
)


def money_from_wire(data: dict[str, Any] | None) -> Money | None:
    if not data or data.get("amount") is None or not data.get("currency"):
        return None
    return Money(int(data["amount"]), data["currency"])


def _find_included(
    included: list[dict[str, Any]], relationship: dict[str, Any] | None
) -> dict[str, Any] | None:
    ref = (relationship or {}).get("data")
    if not isinstance(ref, dict):
        return None
    return next(
        (r for r in included if r.get("id") == ref.get("id") and r.get("type") == ref.get("type")),
        None,
    )


def listing_from_resource(
    resource: dict[str, Any], included: list[dict[str, Any]] | None = None
) -> Listing:
    attrs = resource.get("attributes") or {}
    public = attrs.get("publicData") or {}
    shipping = ShippingConfig(
        price_for_first_item=public.get("shippingPriceInSubunitsOneItem"),
        price_for_additional_items=public.get("shippingPriceInSubunitsAdditionalItems"),
    )
    stock = _find_included(
        included or [], (resource.get("relationships") or {}).get("currentStock")
    )
    current_stock = None
    if stock is not None:
        current_stock = (stock.get("attributes") or {}).get("quantity")
    return Listing(
        id=resource["id"],
        title=attrs.get("title") or "",
        price=money_from_wire(attrs.get("price")),
        shipping_enabled=bool(public.get("shippingEnabled")),
        pickup_enabled=bool(public.get("pickupEnabled")),
        shipping=shipping,
        current_stock=current_stock,
    )


def _commission_bps(entry: Any) -> int | None:
    if not isinstance(entry, dict) or entry.get("percentage") is None:
        return None
    return percent_to_bps(entry["percentage"])


def commission_from_asset(payload: dict[str, Any]) -> CommissionRates:
    """Commission JSON asset; asset list responses use the first entry."""
    asset = payload.get("data")
    if isinstance(asset, list):
        asset = asset[0] if asset else None
    if not isinstance(asset, dict) or asset.get("type") != "jsonAsset":
        return CommissionRates()
    data = (asset.get("attributes") or {}).get("data") or {}
    return CommissionRates(
        provider_bps=_commission_bps(data.get("providerCommission")),
        customer_bps=_commission_bps(data.get("customerCommission")),
    )


def line_item_from_wire(data: dict[str, Any]) -> LineItem:
    unit_price = money_from_wire(data.get("unitPrice"))
    line_total = money_from_wire(data.get("lineTotal"))
    if unit_price is None or line_total is None:
        raise MarketplaceApiError(200, f"line item without price: {data.get('code')}")
    include_for = frozenset(TransactionRole(r) for r in data.get("includeFor") or []) or BOTH_ROLES
    percentage = data.get("percentage")
    quantity = data.get("quantity")
    return LineItem(
        code=data["code"],
        unit_price=unit_price,
        quantity=int(Decimal(str(quantity))) if quantity is not None else 1,
        line_total=line_total,
        include_for=include_for,
        reversal=bool(data.get("reversal")),
        percentage=percent_to_bps(percentage) if percentage is not None else None,
    )


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def transition_record_from_wire(data: dict[str, Any]) -> TransitionRecord:
    return TransitionRecord(
        transition=data["transition"],
        by=data.get("by") or "",
        created_at=_parse_datetime(data.get("createdAt")),
    )


def transaction_from_document(document: dict[str, Any]) -> MarketplaceTransaction:
    """transactions/show response with include=listing."""
    resource = document.get("data") or {}
    included = document.get("included") or []
    attrs = resource.get("attributes") or {}
    listing_resource = _find_included(
        included, (resource.get("relationships") or {}).get("listing")
    )
    if listing_resource is None:
        raise MarketplaceApiError(200, f"transaction {resource.get('id')} has no listing")

    metadata = attrs.get("metadata") or {}
    payin = money_from_wire(attrs.get("payinTotal"))
    return MarketplaceTransaction(
        id=resource["id"],
        process_name=attrs.get("processName") or "",
        listing=listing_from_resource(listing_resource, included),
        last_transition=attrs.get("lastTransition"),
        transitions=[transition_record_from_wire(t) for t in attrs.get("transitions") or []],
        line_items=[line_item_from_wire(li) for li in attrs.get("lineItems") or []],
        offers=[Offer.from_wire(o) for o in metadata.get("offers") or []],
        metadata=metadata,
        protected_data=attrs.get("protectedData") or {},
        payin_currency=payin.currency if payin else None,
    )
