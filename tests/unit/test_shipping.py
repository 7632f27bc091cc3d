"""Tests for sf_pricing.domain.shipping."""

import pytest

from src.sf_common.enums import DeliveryMethod
from src.sf_common.errors import InvalidQuantityError
from src.sf_common.money import Money
from src.sf_pricing.domain.models import Listing, ShippingConfig
from src.sf_pricing.domain.shipping import (
    calculate_cart_shipping_fee,
    calculate_shipping_fee,
    get_cart_delivery_compatibility,
    is_delivery_method_available,
    listing_shipping_fee,
)


def _listing(lid: str = "L1", *, ships: bool = True, pickup: bool = False,
             first: int | None = 500, additional: int | None = 200) -> Listing:
    return Listing(
        id=lid,
        title=lid,
        price=Money(10000, "NOK"),
        shipping_enabled=ships,
        pickup_enabled=pickup,
        shipping=ShippingConfig(first, additional),
    )


class TestCalculateShippingFee:
    def test_single_item(self) -> None:
        assert calculate_shipping_fee(500, 200, "NOK", 1) == Money(500, "NOK")

    def test_additional_items(self) -> None:
        # 500 + 200 * 2
        assert calculate_shipping_fee(500, 200, "NOK", 3) == Money(900, "NOK")

    def test_missing_additional_counts_as_zero(self) -> None:
        assert calculate_shipping_fee(500, None, "NOK", 3) == Money(500, "NOK")

    def test_no_prices_is_none(self) -> None:
        assert calculate_shipping_fee(None, None, "NOK", 2) is None

    def test_zero_quantity_rejected(self) -> None:
        with pytest.raises(InvalidQuantityError):
            calculate_shipping_fee(500, 200, "NOK", 0)


class TestListingShippingFee:
    def test_disabled_listing_has_no_fee(self) -> None:
        assert listing_shipping_fee(_listing(ships=False), "NOK", 1) is None

    def test_enabled_listing(self) -> None:
        assert listing_shipping_fee(_listing(), "NOK", 2) == Money(700, "NOK")

    def test_declared_zero_is_free_shipping(self) -> None:
        listing = _listing(first=0, additional=None)
        assert listing.shipping.is_configured
        assert listing_shipping_fee(listing, "NOK", 2) == Money(0, "NOK")

    def test_no_declared_price_has_no_fee(self) -> None:
        listing = _listing(first=None, additional=None)
        assert not listing.shipping.is_configured
        assert listing_shipping_fee(listing, "NOK", 1) is None


class TestDeliveryCompatibility:
    def test_all_ship(self) -> None:
        compat = get_cart_delivery_compatibility([_listing("A"), _listing("B")])
        assert compat.shipping is True
        assert compat.pickup is False
        assert compat.requires_negotiation is False

    def test_mixed_requires_negotiation(self) -> None:
        compat = get_cart_delivery_compatibility(
            [_listing("A", ships=True), _listing("B", ships=False, pickup=True)]
        )
        assert compat.requires_negotiation is True

    def test_empty_cart(self) -> None:
        assert get_cart_delivery_compatibility([]).requires_negotiation is True

    def test_method_available(self) -> None:
        listings = [_listing("A", pickup=True), _listing("B", pickup=True)]
        assert is_delivery_method_available(listings, DeliveryMethod.SHIPPING)
        assert is_delivery_method_available(listings, DeliveryMethod.PICKUP)
        assert not is_delivery_method_available(listings, DeliveryMethod.NONE)


class TestCartShippingFee:
    def test_sums_per_listing(self) -> None:
        listings = [_listing("A"), _listing("B", first=300, additional=None)]
        quantities = {"A": 2, "B": 1}
        fee = calculate_cart_shipping_fee(listings, quantities.__getitem__, "NOK")
        assert fee == Money(700 + 300, "NOK")

    def test_none_when_nothing_ships(self) -> None:
        listings = [_listing("A", ships=False)]
        assert calculate_cart_shipping_fee(listings, lambda _: 1, "NOK") is None

    def test_none_when_total_is_zero(self) -> None:
        listings = [_listing("A", first=0, additional=0)]
        assert calculate_cart_shipping_fee(listings, lambda _: 1, "NOK") is None
