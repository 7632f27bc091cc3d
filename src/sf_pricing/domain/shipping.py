"""Shipping fee calculation and cart delivery compatibility.

Fee rule per listing: first + additional x (quantity - 1), missing prices count
as zero. A listing without any configured price gets no shipping line.
"""

from collections.abc import Callable
from dataclasses import dataclass

from src.sf_common.enums import DeliveryMethod
from src.sf_common.errors import InvalidQuantityError
from src.sf_common.money import Money
from src.sf_pricing.domain.models import Listing


def calculate_shipping_fee(
    price_for_first_item: int | None,
    price_for_additional_items: int | None,
    currency: str,
    quantity: int,
) -> Money | None:
    if quantity < 1:
        raise InvalidQuantityError(quantity)
    if price_for_first_item is None and price_for_additional_items is None:
        return None
    first = price_for_first_item or 0
    additional = price_for_additional_items or 0
    return Money(first + additional * (quantity - 1), currency)


def listing_shipping_fee(listing: Listing, currency: str, quantity: int) -> Money | None:
    """Shipping for one listing; None when it does not ship or declares no price."""
    if not listing.shipping_enabled or listing.shipping is None:
        return None
    if not listing.shipping.is_configured:
        return None
    return calculate_shipping_fee(
        listing.shipping.price_for_first_item,
        listing.shipping.price_for_additional_items,
        currency,
        quantity,
    )


@dataclass(frozen=True)
class DeliveryCompatibility:
    shipping: bool
    pickup: bool

    @property
    def requires_negotiation(self) -> bool:
        return not (self.shipping or self.pickup)


def get_cart_delivery_compatibility(listings: list[Listing]) -> DeliveryCompatibility:
    """Delivery methods supported by every listing in the cart."""
    if not listings:
        return DeliveryCompatibility(shipping=False, pickup=False)
    return DeliveryCompatibility(
        shipping=all(lst.shipping_enabled for lst in listings),
        pickup=all(lst.pickup_enabled for lst in listings),
    )


def is_delivery_method_available(listings: list[Listing], method: DeliveryMethod) -> bool:
    if not listings:
        return False
    if method == DeliveryMethod.SHIPPING:
        return all(lst.shipping_enabled for lst in listings)
    if method == DeliveryMethod.PICKUP:
        return all(lst.pickup_enabled for lst in listings)
    return False


def calculate_cart_shipping_fee(
    listings: list[Listing],
    quantity_for: Callable[[str], int],
    currency: str,
) -> Money | None:
    """Sum of per-listing shipping; None if no listing ships or the sum is zero."""
    total = 0
    has_any_shipping = False
    for listing in listings:
        fee = listing_shipping_fee(listing, currency, quantity_for(listing.id))
        if fee is None:
            continue
        has_any_shipping = True
        total += fee.amount
    if not has_any_shipping or total <= 0:
        return None
    return Money(total, currency)
