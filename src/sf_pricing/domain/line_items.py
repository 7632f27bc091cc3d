"""Line item builder: listing(s) + order data + commission + tax -> ordered line items.

Output order:
  1. base unit line (main listing) and one cart line per additional cart entry
  2. shipping fee (single line, per-listing fees summed)
  3. frame (single line, all selected frames summed)
  4. provider commission
  5. customer commission
  6. art levy (kunstavgift), when enabled
  7. tax
"""

import logging

from src.sf_common.enums import DeliveryMethod, TransactionRole
from src.sf_common.errors import (
    CurrencyMismatchError,
    InvalidQuantityError,
    ListingNotFoundError,
    MissingListingPriceError,
)
from src.sf_common.money import Money, sum_money
from src.sf_pricing.domain.codes import (
    LINE_ITEM_ART_LEVY,
    LINE_ITEM_FRAME,
    LINE_ITEM_SHIPPING_FEE,
    LINE_ITEM_TAX,
    cart_item_code,
    unit_line_item_code,
)
from src.sf_pricing.domain.commission import (
    commission_base,
    customer_commission,
    provider_commission,
)
from src.sf_pricing.domain.models import (
    BOTH_ROLES,
    CUSTOMER_ONLY,
    CartItem,
    CommissionRates,
    LineItem,
    Listing,
    OrderData,
)
from src.sf_pricing.domain.shipping import calculate_cart_shipping_fee
from src.sf_tax.domain.models import TaxResult

logger = logging.getLogger(__name__)


def _unit_line(code: str, price: Money, quantity: int) -> LineItem:
    return LineItem(
        code=code,
        unit_price=price,
        quantity=quantity,
        line_total=price * quantity,
        include_for=BOTH_ROLES,
    )


def _resolve_main_price(listing: Listing, order: OrderData) -> Money:
    if order.offer is not None:
        return order.offer
    if listing.price is None:
        raise MissingListingPriceError(listing.id)
    return listing.price


def _resolve_cart_price(item: CartItem, cart_listing: Listing | None) -> Money:
    # Cart entries are priced from fetched listings only; a client-sent price is ignored.
    if cart_listing is None:
        raise ListingNotFoundError(item.id)
    if cart_listing.price is None:
        raise MissingListingPriceError(item.id)
    return cart_listing.price


def _additional_cart_items(listing: Listing, order: OrderData) -> list[CartItem]:
    # The main listing may also appear as the first cart entry; it is priced once.
    return [item for item in order.cart_items if item.id != listing.id]


def build_base_line_items(
    listing: Listing,
    order: OrderData,
    cart_listings: dict[str, Listing],
) -> list[LineItem]:
    if order.quantity < 1:
        raise InvalidQuantityError(order.quantity)
    main_price = _resolve_main_price(listing, order)
    currency = main_price.currency

    items = [_unit_line(unit_line_item_code(order.unit_type), main_price, order.quantity)]
    for cart_item in _additional_cart_items(listing, order):
        if cart_item.quantity < 1:
            raise InvalidQuantityError(cart_item.quantity)
        price = _resolve_cart_price(cart_item, cart_listings.get(cart_item.id))
        if price.currency != currency:
            raise CurrencyMismatchError(currency, price.currency)
        items.append(_unit_line(cart_item_code(cart_item.id), price, cart_item.quantity))
    return items


def build_shipping_line_item(
    listing: Listing,
    order: OrderData,
    cart_listings: dict[str, Listing],
    currency: str,
) -> LineItem | None:
    if order.delivery_method != DeliveryMethod.SHIPPING:
        return None
    quantities = {listing.id: order.quantity}
    shipped = [listing]
    for cart_item in _additional_cart_items(listing, order):
        cart_listing = cart_listings.get(cart_item.id)
        if cart_listing is None:
            raise ListingNotFoundError(cart_item.id)
        quantities[cart_item.id] = cart_item.quantity
        shipped.append(cart_listing)

    fee = calculate_cart_shipping_fee(shipped, lambda lid: quantities[lid], currency)
    if fee is None:
        return None
    return LineItem(
        code=LINE_ITEM_SHIPPING_FEE,
        unit_price=fee,
        quantity=1,
        line_total=fee,
        include_for=BOTH_ROLES,
    )


def build_frame_line_item(listing: Listing, order: OrderData, currency: str) -> LineItem | None:
    frames = [order.frame] if order.frame is not None else []
    frames += [
        item.frame for item in _additional_cart_items(listing, order) if item.frame is not None
    ]
    total = sum(f.price_in_subunits for f in frames if f is not None and f.price_in_subunits > 0)
    if total <= 0:
        return None
    price = Money(total, currency)
    return LineItem(
        code=LINE_ITEM_FRAME,
        unit_price=price,
        quantity=1,
        line_total=price,
        include_for=CUSTOMER_ONLY,
    )


def build_art_levy_line_item(base_items: list[LineItem], rate_bps: int, currency: str) -> LineItem | None:
    base = sum_money([item.line_total for item in base_items], currency)
    levy = base.percentage(rate_bps)
    if levy.amount <= 0:
        return None
    return LineItem(
        code=LINE_ITEM_ART_LEVY,
        unit_price=base,
        quantity=1,
        line_total=levy,
        include_for=CUSTOMER_ONLY,
        percentage=rate_bps,
    )


def build_tax_line_item(tax: TaxResult | None, currency: str) -> LineItem | None:
    if tax is None or tax.tax_amount.amount <= 0:
        return None
    if tax.tax_amount.currency != currency:
        raise CurrencyMismatchError(currency, tax.tax_amount.currency)
    return LineItem(
        code=LINE_ITEM_TAX,
        unit_price=tax.tax_amount,
        quantity=1,
        line_total=tax.tax_amount,
        include_for=CUSTOMER_ONLY,
    )


def transaction_line_items(
    listing: Listing,
    order: OrderData,
    commission: CommissionRates,
    cart_listings: list[Listing] | None = None,
    tax: TaxResult | None = None,
    art_levy_bps: int | None = None,
) -> list[LineItem]:
    """Build the full ordered line item list for one transaction request."""
    cart_by_id = {lst.id: lst for lst in cart_listings or []}
    base_items = build_base_line_items(listing, order, cart_by_id)
    currency = base_items[0].unit_price.currency

    shipping = build_shipping_line_item(listing, order, cart_by_id, currency)
    frame = build_frame_line_item(listing, order, currency)

    line_items = list(base_items)
    if shipping is not None:
        line_items.append(shipping)
    if frame is not None:
        line_items.append(frame)

    base = commission_base(base_items, shipping, currency)
    if commission.provider_bps is not None:
        line_items.append(provider_commission(base, commission.provider_bps))
    if commission.customer_bps is not None:
        line_items.append(customer_commission(base, commission.customer_bps))

    if art_levy_bps:
        levy = build_art_levy_line_item(base_items, art_levy_bps, currency)
        if levy is not None:
            line_items.append(levy)

    tax_item = build_tax_line_item(tax, currency)
    if tax_item is not None:
        line_items.append(tax_item)

    logger.debug(
        "Built %d line items for listing=%s currency=%s", len(line_items), listing.id, currency
    )
    return line_items


# ---------------------------------------------------------------------------
# Reversals and totals
# ---------------------------------------------------------------------------


def reverse_line_items(line_items: list[LineItem]) -> list[LineItem]:
    """Full refund: one reversal per non-reversed line, totals negated."""
    return [
        LineItem(
            code=item.code,
            unit_price=item.unit_price,
            quantity=-item.quantity,
            line_total=-item.line_total,
            include_for=item.include_for,
            reversal=True,
            percentage=item.percentage,
        )
        for item in line_items
        if not item.reversal
    ]


def line_items_for_role(line_items: list[LineItem], role: TransactionRole) -> list[LineItem]:
    return [item for item in line_items if item.is_for(role)]


def _role_total(line_items: list[LineItem], role: TransactionRole) -> Money | None:
    relevant = line_items_for_role(line_items, role)
    if not relevant:
        return None
    currency = relevant[0].line_total.currency
    # Reversal totals are already negative.
    return sum_money([item.line_total for item in relevant], currency)


def payin_total(line_items: list[LineItem]) -> Money | None:
    """What the customer pays."""
    return _role_total(line_items, TransactionRole.CUSTOMER)


def payout_total(line_items: list[LineItem]) -> Money | None:
    """What the provider receives."""
    return _role_total(line_items, TransactionRole.PROVIDER)


def net_totals_by_code(line_items: list[LineItem]) -> dict[str, Money]:
    totals: dict[str, Money] = {}
    for item in line_items:
        current = totals.get(item.code)
        totals[item.code] = item.line_total if current is None else current + item.line_total
    return totals
