"""Tests for JSON:API document mapping."""

from datetime import datetime, timezone

import pytest

from src.sf_common.enums import TransactionRole
from src.sf_common.errors import InvalidActorError, MarketplaceApiError
from src.sf_common.money import Money
from src.sf_marketplace.infrastructure.mappers import (
    commission_from_asset,
    line_item_from_wire,
    listing_from_resource,
    money_from_wire,
    transaction_from_document,
)
from src.sf_pricing.domain.models import BOTH_ROLES
from tests.documents import STOCK, listing_resource, transaction_document


class TestMoney:
    def test_parse(self) -> None:
        assert money_from_wire({"amount": 700, "currency": "NOK"}) == Money(700, "NOK")

    @pytest.mark.parametrize("data", [None, {}, {"amount": None, "currency": "NOK"}, {"amount": 1}])
    def test_missing(self, data) -> None:
        assert money_from_wire(data) is None


class TestListing:
    def test_public_data(self) -> None:
        listing = listing_from_resource(
            listing_resource(
                shippingEnabled=True,
                pickupEnabled=False,
                shippingPriceInSubunitsOneItem=700,
                shippingPriceInSubunitsAdditionalItems=300,
            ),
            [STOCK],
        )
        assert listing.id == "listing-1"
        assert listing.price == Money(20000, "NOK")
        assert listing.shipping_enabled and not listing.pickup_enabled
        assert listing.shipping.price_for_first_item == 700
        assert listing.shipping.price_for_additional_items == 300
        assert listing.current_stock == 1

    def test_stock_not_included(self) -> None:
        listing = listing_from_resource(listing_resource())
        assert listing.current_stock is None
        assert not listing.shipping.is_configured

    def test_no_price(self) -> None:
        resource = listing_resource()
        del resource["attributes"]["price"]
        assert listing_from_resource(resource).price is None


class TestCommission:
    def test_asset(self) -> None:
        payload = {
            "data": {
                "type": "jsonAsset",
                "attributes": {
                    "data": {
                        "providerCommission": {"percentage": 10},
                        "customerCommission": {"percentage": 5.5},
                    }
                },
            }
        }
        rates = commission_from_asset(payload)
        assert rates.provider_bps == 1000
        assert rates.customer_bps == 550

    def test_asset_list_uses_first(self) -> None:
        payload = {
            "data": [
                {"type": "jsonAsset", "attributes": {"data": {"providerCommission": {"percentage": 12.5}}}}
            ]
        }
        rates = commission_from_asset(payload)
        assert rates.provider_bps == 1250
        assert rates.customer_bps is None

    @pytest.mark.parametrize("payload", [{}, {"data": []}, {"data": {"type": "imageAsset"}}])
    def test_unusable_asset_means_no_commission(self, payload) -> None:
        rates = commission_from_asset(payload)
        assert rates.provider_bps is None and rates.customer_bps is None


class TestLineItem:
    def test_quantity_item(self) -> None:
        item = line_item_from_wire({
            "code": "line-item/negotiatedItem",
            "unitPrice": {"amount": 9000, "currency": "NOK"},
            "quantity": "1",
            "lineTotal": {"amount": 9000, "currency": "NOK"},
            "includeFor": ["customer", "provider"],
            "reversal": False,
        })
        assert item.quantity == 1
        assert item.include_for == BOTH_ROLES
        assert item.percentage is None

    def test_percentage_item(self) -> None:
        item = line_item_from_wire({
            "code": "line-item/provider-commission",
            "unitPrice": {"amount": 9000, "currency": "NOK"},
            "percentage": -10.0,
            "lineTotal": {"amount": -900, "currency": "NOK"},
            "includeFor": ["provider"],
        })
        assert item.percentage == -1000
        assert item.include_for == frozenset({TransactionRole.PROVIDER})

    def test_missing_total(self) -> None:
        with pytest.raises(MarketplaceApiError):
            line_item_from_wire({"code": "line-item/item", "unitPrice": {"amount": 1, "currency": "NOK"}})


class TestTransaction:
    def test_document(self) -> None:
        tx = transaction_from_document(transaction_document())
        assert tx.id == "tx-1"
        assert tx.process_name == "negotiated-purchase"
        assert tx.listing.id == "listing-1"
        assert tx.listing.current_stock == 1
        assert tx.last_transition == "transition/provider-counter-offer"
        assert [o.offer_in_subunits for o in tx.offers] == [8000, 9000]
        assert tx.metadata["note"] == "kept"
        assert tx.unit_type == "negotiatedItem"
        assert tx.payin_currency == "NOK"
        assert tx.transitions[0].created_at == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)

    def test_without_payin(self) -> None:
        tx = transaction_from_document(transaction_document(payinTotal=None, metadata={}))
        assert tx.payin_currency is None
        assert tx.offers == []

    def test_listing_missing(self) -> None:
        doc = transaction_document()
        doc["included"] = []
        with pytest.raises(MarketplaceApiError):
            transaction_from_document(doc)

    def test_corrupt_offer_role(self) -> None:
        doc = transaction_document(metadata={
            "offers": [{"offerInSubunits": 8000, "by": None, "transition": "transition/customer-offer"}]
        })
        with pytest.raises(InvalidActorError):
            transaction_from_document(doc)
