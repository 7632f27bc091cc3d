"""Integer minor-unit money for the storefront.

All prices, fees and taxes are int subunits (cents/øre) tagged with an ISO
currency code. No float, no Decimal in stored amounts.
"""

from dataclasses import dataclass

from src.sf_common.errors import CurrencyMismatchError

# Minor units per currency; anything not listed uses 2.
_MINOR_UNITS: dict[str, int] = {
    "JPY": 0,
    "KRW": 0,
    "ISK": 0,
    "BHD": 3,
    "KWD": 3,
}


def minor_units(currency: str) -> int:
    return _MINOR_UNITS.get(currency.upper(), 2)


@dataclass(frozen=True)
class Money:
    amount: int  # subunits
    currency: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"Money amount must be int subunits, got {self.amount!r}")
        if not self.currency:
            raise ValueError("Money currency must be a non-empty ISO code")
        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(0, currency)

    def _check(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __add__(self, other: "Money") -> "Money":
        self._check(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._check(other)
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __mul__(self, quantity: int) -> "Money":
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            return NotImplemented
        return Money(self.amount * quantity, self.currency)

    __rmul__ = __mul__

    def percentage(self, percent_bps: int) -> "Money":
        """Return ``self * percent_bps / 10000`` rounded half away from zero.

        1000 bps = 10%. The sign follows ``self.amount * percent_bps``.
        """
        product = self.amount * percent_bps
        magnitude = (abs(product) + 5000) // 10000
        return Money(magnitude if product >= 0 else -magnitude, self.currency)

    def to_display(self) -> str:
        """Render as '1,500.00 NOK'; negative amounts get a leading '-'."""
        digits = minor_units(self.currency)
        abs_amount = abs(self.amount)
        sign = "-" if self.amount < 0 else ""
        if digits == 0:
            return f"{sign}{abs_amount:,} {self.currency}"
        scale = 10**digits
        return f"{sign}{abs_amount // scale:,}.{abs_amount % scale:0{digits}d} {self.currency}"


def sum_money(items: list[Money], currency: str) -> Money:
    """Sum same-currency amounts; an empty list sums to zero in ``currency``."""
    total = Money.zero(currency)
    for m in items:
        total = total + m
    return total


def percent_to_bps(percentage: float | int | str) -> int:
    """Convert a commission percentage (e.g. 12.5) to basis points (1250).

    Goes through str to avoid binary float artefacts (0.1 * 100).
    """
    text = str(percentage).strip()
    if "." in text:
        whole, frac = text.split(".", 1)
        frac = (frac + "00")[:2]
    else:
        whole, frac = text, "00"
    negative = whole.startswith("-")
    bps = abs(int(whole or "0")) * 100 + int(frac)
    return -bps if negative else bps
