"""Tests for sf_tax: manual VAT table, TaxResolver fallback rules, request service."""

from unittest.mock import AsyncMock

import pytest

from src.sf_common.errors import (
    InvalidShippingAddressError,
    MissingCurrencyError,
    TaxProviderError,
)
from src.sf_common.money import Money
from src.sf_tax.application.resolver import TaxResolver, build_tax_lines
from src.sf_tax.application.schemas import CalculateTaxRequest, ShippingAddressIn
from src.sf_tax.application.service import calculate_tax
from src.sf_tax.domain.models import ShippingAddress, TaxLine, TaxResult
from src.sf_tax.domain.rates import calculate_manual_tax, vat_rate_bps

NOK = "NOK"
NORWAY = ShippingAddress(country="NO", postal_code="0150", city="Oslo")


def _m(amount: int) -> Money:
    return Money(amount, NOK)


class TestManualTax:
    def test_known_country(self) -> None:
        result = calculate_manual_tax(_m(10000), "NO")
        assert result.tax_amount == _m(2500)
        assert result.tax_rate == 25.0
        assert result.is_manual_calculation is True

    def test_fractional_rate_rounds(self) -> None:
        # 7.7% of 9999 = 769.92 -> 770
        assert calculate_manual_tax(_m(9999), "ch").tax_amount == _m(770)

    def test_unknown_country_is_zero(self) -> None:
        result = calculate_manual_tax(_m(10000), "XX")
        assert result.tax_amount == _m(0)
        assert result.tax_rate == 0
        assert result.is_manual_calculation is True

    def test_rate_lookup(self) -> None:
        assert vat_rate_bps("de") == 1900
        assert vat_rate_bps(None) == 0


class TestBuildTaxLines:
    def test_skips_zero_categories(self) -> None:
        lines = build_tax_lines(_m(10000), _m(0), _m(1500))
        assert lines == [TaxLine(10000, "order-items"), TaxLine(1500, "frame")]


class TestTaxResolver:
    @pytest.mark.asyncio
    async def test_disabled_makes_no_remote_call(self) -> None:
        provider = AsyncMock()
        resolver = TaxResolver(enabled=False, provider=provider)

        result = await resolver.resolve(_m(10000), _m(700), _m(0), NORWAY, NOK)

        assert result.tax_amount == _m(0)
        assert result.tax_rate == 0
        provider.calculate.assert_not_called()

    @pytest.mark.asyncio
    async def test_disabled_ignores_invalid_address(self) -> None:
        provider = AsyncMock()
        resolver = TaxResolver(enabled=False, provider=provider)
        result = await resolver.resolve(_m(10000), _m(0), _m(0), None, NOK)
        assert result.tax_amount == _m(0)
        provider.calculate.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_result_is_used(self) -> None:
        provider = AsyncMock()
        provider.calculate.return_value = TaxResult(tax_amount=_m(2675), tax_rate=25.0)
        resolver = TaxResolver(enabled=True, provider=provider)

        result = await resolver.resolve(_m(10000), _m(700), _m(0), NORWAY, NOK)

        assert result.tax_amount == _m(2675)
        assert result.is_manual_calculation is False
        lines = provider.calculate.call_args.args[0]
        assert [line.reference for line in lines] == ["order-items", "delivery"]

    @pytest.mark.asyncio
    async def test_provider_failure_falls_back_to_manual(self) -> None:
        provider = AsyncMock()
        provider.calculate.side_effect = TaxProviderError("timeout")
        resolver = TaxResolver(enabled=True, provider=provider)

        result = await resolver.resolve(_m(10000), _m(700), _m(300), NORWAY, NOK)

        # 25% of 11000
        assert result.tax_amount == _m(2750)
        assert result.is_manual_calculation is True
        assert "timeout" in (result.error or "")

    @pytest.mark.asyncio
    async def test_unknown_country_failure_is_zero_manual(self) -> None:
        provider = AsyncMock()
        provider.calculate.side_effect = TaxProviderError("bad address")
        resolver = TaxResolver(enabled=True, provider=provider)

        result = await resolver.resolve(_m(10000), _m(0), _m(0), ShippingAddress("XX"), NOK)

        assert result.tax_amount == _m(0)
        assert result.tax_rate == 0
        assert result.is_manual_calculation is True

    @pytest.mark.asyncio
    async def test_unexpected_provider_fault_falls_back(self) -> None:
        provider = AsyncMock()
        provider.calculate.side_effect = RuntimeError("boom")
        resolver = TaxResolver(enabled=True, provider=provider)
        result = await resolver.resolve(_m(10000), _m(0), _m(0), NORWAY, NOK)
        assert result.is_manual_calculation is True
        assert result.tax_amount == _m(2500)

    @pytest.mark.asyncio
    async def test_missing_country_is_zero(self) -> None:
        provider = AsyncMock()
        resolver = TaxResolver(enabled=True, provider=provider)
        result = await resolver.resolve(_m(10000), _m(0), _m(0), ShippingAddress(None), NOK)
        assert result.tax_amount == _m(0)
        assert result.error == "missing destination country"
        provider.calculate.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_provider_uses_manual_table(self) -> None:
        resolver = TaxResolver(enabled=True, provider=None)
        result = await resolver.resolve(_m(10000), _m(0), _m(0), NORWAY, NOK)
        assert result.tax_amount == _m(2500)
        assert result.is_manual_calculation is True

    @pytest.mark.asyncio
    async def test_nothing_taxable(self) -> None:
        provider = AsyncMock()
        resolver = TaxResolver(enabled=True, provider=provider)
        result = await resolver.resolve(_m(0), _m(0), _m(0), NORWAY, NOK)
        assert result.tax_amount == _m(0)
        provider.calculate.assert_not_called()


class TestCalculateTaxService:
    @pytest.mark.asyncio
    async def test_missing_country_rejected(self) -> None:
        req = CalculateTaxRequest(order_total=100, currency="NOK",
                                  shipping_address=ShippingAddressIn(city="Oslo"))
        with pytest.raises(InvalidShippingAddressError):
            await calculate_tax(req, TaxResolver(enabled=True))

    @pytest.mark.asyncio
    async def test_missing_currency_rejected(self) -> None:
        req = CalculateTaxRequest(order_total=100, shipping_address=ShippingAddressIn(country="NO"))
        with pytest.raises(MissingCurrencyError):
            await calculate_tax(req, TaxResolver(enabled=True))

    @pytest.mark.asyncio
    async def test_disabled_response(self) -> None:
        req = CalculateTaxRequest(order_total=10000, currency="nok",
                                  shipping_address=ShippingAddressIn(country="no"))
        resp = await calculate_tax(req, TaxResolver(enabled=False))
        assert resp.tax_amount == 0
        assert resp.tax_enabled is False
        assert resp.model_dump(by_alias=True)["isManualCalculation"] is False

    @pytest.mark.asyncio
    async def test_manual_response(self) -> None:
        req = CalculateTaxRequest(order_total=10000, shipping_total=500, currency="NOK",
                                  shipping_address=ShippingAddressIn(country="se"))
        resp = await calculate_tax(req, TaxResolver(enabled=True))
        assert resp.tax_amount == 2625
        assert resp.tax_rate == 25.0
        assert resp.is_manual_calculation is True
