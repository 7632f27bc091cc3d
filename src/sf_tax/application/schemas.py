"""Pydantic schemas for the checkout tax endpoint (camelCase on the wire)."""

from pydantic import Field

from src.sf_common.schemas import CamelModel
from src.sf_tax.domain.models import ShippingAddress, TaxResult


class ShippingAddressIn(CamelModel):
    country: str | None = None
    postal_code: str | None = None
    city: str | None = None
    line1: str | None = None
    street_address: str | None = None  # checkout form name for line1
    state: str | None = None

    def to_domain(self) -> ShippingAddress:
        return ShippingAddress(
            country=self.country.strip().upper() if self.country else None,
            postal_code=self.postal_code,
            city=self.city,
            line1=self.line1 or self.street_address,
            state=self.state,
        )


class CalculateTaxRequest(CamelModel):
    order_total: int = Field(0, ge=0)
    shipping_total: int = Field(0, ge=0)
    frame_total: int = Field(0, ge=0)
    shipping_address: ShippingAddressIn | None = None
    currency: str | None = None


class CalculateTaxResponse(CamelModel):
    tax_amount: int
    tax_rate: float
    tax_enabled: bool
    is_manual_calculation: bool = False

    @classmethod
    def from_result(cls, result: TaxResult, enabled: bool) -> "CalculateTaxResponse":
        return cls(
            tax_amount=result.tax_amount.amount,
            tax_rate=result.tax_rate,
            tax_enabled=enabled,
            is_manual_calculation=result.is_manual_calculation,
        )
