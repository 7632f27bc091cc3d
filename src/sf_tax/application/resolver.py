"""TaxResolver — checkout tax with provider call and manual fallback.

Never raises for provider problems: disabled → zero, no destination → zero,
provider failure → manual VAT table (is_manual_calculation=True). The failure
reason is kept in TaxResult.error for diagnostics only.
"""

import logging

from src.sf_common.errors import TaxProviderError
from src.sf_common.money import Money, sum_money
from src.sf_tax.domain.models import (
    REFERENCE_DELIVERY,
    REFERENCE_FRAME,
    REFERENCE_ORDER_ITEMS,
    ShippingAddress,
    TaxLine,
    TaxResult,
)
from src.sf_tax.domain.provider import TaxProviderProtocol
from src.sf_tax.domain.rates import calculate_manual_tax

logger = logging.getLogger(__name__)


def build_tax_lines(order_total: Money, shipping_total: Money, frame_total: Money) -> list[TaxLine]:
    """One line per non-zero category."""
    candidates = [
        (order_total, REFERENCE_ORDER_ITEMS),
        (shipping_total, REFERENCE_DELIVERY),
        (frame_total, REFERENCE_FRAME),
    ]
    return [TaxLine(amount=m.amount, reference=ref) for m, ref in candidates if m.amount > 0]


class TaxResolver:
    def __init__(self, enabled: bool, provider: TaxProviderProtocol | None = None) -> None:
        self._enabled = enabled
        self._provider = provider

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def resolve(
        self,
        order_total: Money,
        shipping_total: Money,
        frame_total: Money,
        address: ShippingAddress | None,
        currency: str,
    ) -> TaxResult:
        if not self._enabled:
            return TaxResult.zero(currency)

        if address is None or not address.is_valid:
            logger.warning("No valid shipping country for tax calculation, using zero tax")
            return TaxResult.zero(currency, error="missing destination country")

        lines = build_tax_lines(order_total, shipping_total, frame_total)
        if not lines:
            return TaxResult.zero(currency)
        total = sum_money([order_total, shipping_total, frame_total], currency)

        if self._provider is None:
            logger.warning("Tax provider not configured, using manual VAT table")
            return calculate_manual_tax(total, address.country, error="tax provider not configured")

        try:
            return await self._provider.calculate(lines, address, currency)
        except TaxProviderError as exc:
            logger.warning("Tax provider failed, using manual calculation: %s", exc.message)
            return calculate_manual_tax(total, address.country, error=exc.message)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected tax provider fault, using manual calculation")
            return calculate_manual_tax(total, address.country, error=str(exc))
