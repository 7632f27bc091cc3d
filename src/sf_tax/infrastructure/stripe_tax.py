"""Stripe Tax adapter (POST /v1/tax/calculations, form-encoded).

Every failure mode is raised as TaxProviderError; the resolver decides what to
do with it.
"""

import logging
from typing import Any

import httpx

from src.sf_common.errors import TaxProviderError
from src.sf_common.money import Money
from src.sf_tax.domain.models import ShippingAddress, TaxLine, TaxResult

logger = logging.getLogger(__name__)

# Stripe's recommended tax code for artwork / collectibles
ART_TAX_CODE = "txcd_99999999"


def build_calculation_form(
    lines: list[TaxLine], address: ShippingAddress, currency: str
) -> dict[str, str]:
    form: dict[str, str] = {"currency": currency.lower()}
    for i, line in enumerate(lines):
        form[f"line_items[{i}][amount]"] = str(line.amount)
        form[f"line_items[{i}][reference]"] = line.reference or f"item-{i}"
        form[f"line_items[{i}][tax_code]"] = ART_TAX_CODE
    prefix = "customer_details[address]"
    form[f"{prefix}[country]"] = address.country or ""
    form[f"{prefix}[postal_code]"] = address.postal_code or ""
    form[f"{prefix}[city]"] = address.city or ""
    form[f"{prefix}[line1]"] = address.line1 or ""
    form[f"{prefix}[state]"] = address.state or ""
    form["customer_details[address_source]"] = "shipping"
    return form


def parse_calculation(payload: dict[str, Any], currency: str) -> TaxResult:
    """Map a Stripe tax calculation to TaxResult; malformed payload -> TaxProviderError."""
    try:
        tax_amount = int(payload.get("tax_amount_exclusive") or 0)
        breakdown = payload.get("tax_breakdown") or []
        rate = 0.0
        if breakdown:
            # percentage_decimal is already a percentage string, e.g. "25.0"
            rate = float(breakdown[0]["tax_rate_details"]["percentage_decimal"])
    except (KeyError, TypeError, ValueError) as exc:
        raise TaxProviderError(f"malformed calculation response: {exc}") from exc
    return TaxResult(
        tax_amount=Money(tax_amount, currency),
        tax_rate=rate,
        calculation_id=payload.get("id"),
    )


class StripeTaxClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        secret_key: str,
        base_url: str = "https://api.stripe.com",
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must be provided")
        self._http = http
        self._secret_key = secret_key
        self._base_url = base_url.rstrip("/")

    async def calculate(
        self, lines: list[TaxLine], address: ShippingAddress, currency: str
    ) -> TaxResult:
        form = build_calculation_form(lines, address, currency)
        try:
            resp = await self._http.post(
                f"{self._base_url}/v1/tax/calculations",
                data=form,
                auth=(self._secret_key, ""),
            )
        except httpx.HTTPError as exc:
            raise TaxProviderError(f"request failed: {exc}") from exc

        if resp.status_code >= 400:
            detail = resp.text[:200]
            raise TaxProviderError(f"status {resp.status_code}: {detail}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise TaxProviderError("response is not JSON") from exc
        if not isinstance(payload, dict):
            raise TaxProviderError("response is not an object")

        result = parse_calculation(payload, currency)
        logger.debug(
            "Stripe tax calculation %s: amount=%d rate=%s",
            result.calculation_id, result.tax_amount.amount, result.tax_rate,
        )
        return result
