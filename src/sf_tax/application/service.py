"""Checkout tax estimate — validates the request, then delegates to TaxResolver."""

from src.sf_common.errors import InvalidShippingAddressError, MissingCurrencyError
from src.sf_common.money import Money
from src.sf_tax.application.resolver import TaxResolver
from src.sf_tax.application.schemas import CalculateTaxRequest, CalculateTaxResponse


async def calculate_tax(req: CalculateTaxRequest, resolver: TaxResolver) -> CalculateTaxResponse:
    if req.shipping_address is None or not req.shipping_address.country:
        raise InvalidShippingAddressError()
    if not req.currency:
        raise MissingCurrencyError()

    currency = req.currency.upper()
    result = await resolver.resolve(
        Money(req.order_total, currency),
        Money(req.shipping_total, currency),
        Money(req.frame_total, currency),
        req.shipping_address.to_domain(),
        currency,
    )
    return CalculateTaxResponse.from_result(result, enabled=resolver.enabled)
