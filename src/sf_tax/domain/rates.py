"""Manual VAT fallback used when the tax provider is unavailable.

Standard rates only; artwork may carry reduced rates in some countries.
Static table, kept in sync by hand.
"""

from src.sf_common.money import Money
from src.sf_tax.domain.models import TaxResult

# Basis points (2500 = 25%)
VAT_RATES_BPS: dict[str, int] = {
    "NO": 2500,  # not EU, primary market
    "SE": 2500,
    "DK": 2500,
    "FI": 2400,
    "DE": 1900,
    "AT": 2000,
    "BE": 2100,
    "BG": 2000,
    "HR": 2500,
    "CY": 1900,
    "CZ": 2100,
    "EE": 2200,
    "FR": 2000,
    "GR": 2400,
    "HU": 2700,
    "IE": 2300,
    "IT": 2200,
    "LV": 2100,
    "LT": 2100,
    "LU": 1700,
    "MT": 1800,
    "NL": 2100,
    "PL": 2300,
    "PT": 2300,
    "RO": 1900,
    "SK": 2000,
    "SI": 2200,
    "ES": 2100,
    "GB": 2000,
    "CH": 770,
}


def vat_rate_bps(country_code: str | None) -> int:
    """Unknown or missing country -> 0."""
    if not country_code:
        return 0
    return VAT_RATES_BPS.get(country_code.strip().upper(), 0)


def calculate_manual_tax(total: Money, country_code: str | None, error: str | None = None) -> TaxResult:
    rate_bps = vat_rate_bps(country_code)
    return TaxResult(
        tax_amount=total.percentage(rate_bps),
        tax_rate=rate_bps / 100,
        is_manual_calculation=True,
        error=error,
    )
