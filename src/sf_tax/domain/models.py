"""Domain models for sf_tax — pure dataclasses."""

from dataclasses import dataclass

from src.sf_common.money import Money

# Stable per-category references sent to the tax provider.
# 'shipping' is reserved by the provider, so delivery is sent as 'delivery'.
REFERENCE_ORDER_ITEMS = "order-items"
REFERENCE_DELIVERY = "delivery"
REFERENCE_FRAME = "frame"


@dataclass(frozen=True)
class ShippingAddress:
    country: str | None
    postal_code: str | None = None
    city: str | None = None
    line1: str | None = None
    state: str | None = None

    @property
    def is_valid(self) -> bool:
        return bool(self.country and len(self.country.strip()) == 2)


@dataclass(frozen=True)
class TaxLine:
    amount: int  # subunits
    reference: str


@dataclass(frozen=True)
class TaxResult:
    tax_amount: Money
    tax_rate: float  # percentage, e.g. 25.0
    is_manual_calculation: bool = False
    error: str | None = None
    calculation_id: str | None = None

    @classmethod
    def zero(cls, currency: str, error: str | None = None) -> "TaxResult":
        return cls(tax_amount=Money.zero(currency), tax_rate=0.0, error=error)
