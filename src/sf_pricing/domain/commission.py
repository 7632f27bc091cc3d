"""Commission base and commission line items.

Base = non-reversed unit lines (main + cart) + shipping. Frame, art levy and tax
are not commissionable.
"""

from src.sf_common.money import Money, sum_money
from src.sf_pricing.domain.codes import (
    LINE_ITEM_CUSTOMER_COMMISSION,
    LINE_ITEM_PROVIDER_COMMISSION,
)
from src.sf_pricing.domain.models import CUSTOMER_ONLY, PROVIDER_ONLY, LineItem


def commission_base(base_items: list[LineItem], shipping: LineItem | None, currency: str) -> Money:
    lines = [item.line_total for item in base_items if not item.reversal]
    if shipping is not None and not shipping.reversal:
        lines.append(shipping.line_total)
    return sum_money(lines, currency)


def provider_commission(base: Money, rate_bps: int) -> LineItem:
    """Negative line item deducted from the provider payout."""
    percentage = -abs(rate_bps)
    return LineItem(
        code=LINE_ITEM_PROVIDER_COMMISSION,
        unit_price=base,
        quantity=1,
        line_total=base.percentage(percentage),
        include_for=PROVIDER_ONLY,
        percentage=percentage,
    )


def customer_commission(base: Money, rate_bps: int) -> LineItem:
    """Positive line item added to the customer payin."""
    percentage = abs(rate_bps)
    return LineItem(
        code=LINE_ITEM_CUSTOMER_COMMISSION,
        unit_price=base,
        quantity=1,
        line_total=base.percentage(percentage),
        include_for=CUSTOMER_ONLY,
        percentage=percentage,
    )
