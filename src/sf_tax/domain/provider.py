"""Tax provider Protocol — the resolver depends on this, not on a concrete client."""

from typing import Protocol

from src.sf_tax.domain.models import ShippingAddress, TaxLine, TaxResult


class TaxProviderProtocol(Protocol):
    async def calculate(
        self, lines: list[TaxLine], address: ShippingAddress, currency: str
    ) -> TaxResult:
        """Return the provider's tax for ``lines``; raise TaxProviderError on any failure."""
        ...
