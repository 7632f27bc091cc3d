"""Domain models for sf_pricing — pure dataclasses, no HTTP or pydantic dependency."""

from dataclasses import dataclass, field

from src.sf_common.enums import DeliveryMethod, TransactionRole
from src.sf_common.money import Money

CUSTOMER_ONLY = frozenset({TransactionRole.CUSTOMER})
PROVIDER_ONLY = frozenset({TransactionRole.PROVIDER})
BOTH_ROLES = frozenset({TransactionRole.CUSTOMER, TransactionRole.PROVIDER})


@dataclass(frozen=True)
class ShippingConfig:
    price_for_first_item: int | None = None        # subunits
    price_for_additional_items: int | None = None  # subunits

    @property
    def is_configured(self) -> bool:
        # a declared price of 0 is free shipping, not a missing price
        return self.price_for_first_item is not None or self.price_for_additional_items is not None


@dataclass(frozen=True)
class Listing:
    id: str
    title: str
    price: Money | None
    shipping_enabled: bool = False
    pickup_enabled: bool = False
    shipping: ShippingConfig | None = None
    current_stock: int | None = None


@dataclass(frozen=True)
class FrameInfo:
    label: str | None
    price_in_subunits: int


@dataclass(frozen=True)
class CartItem:
    """Protected checkout data for one additional cart entry (not persisted here)."""

    id: str  # listing id
    title: str | None = None
    quantity: int = 1
    price: Money | None = None
    image_url: str | None = None
    selected_frame_label: str | None = None
    frame_price_in_subunits: int | None = None

    @property
    def frame(self) -> FrameInfo | None:
        if not self.frame_price_in_subunits:
            return None
        return FrameInfo(self.selected_frame_label, self.frame_price_in_subunits)


@dataclass(frozen=True)
class CommissionRates:
    provider_bps: int | None = None  # None = not configured
    customer_bps: int | None = None


@dataclass
class OrderData:
    quantity: int = 1
    delivery_method: DeliveryMethod = DeliveryMethod.NONE
    unit_type: str = "item"
    frame: FrameInfo | None = None  # main listing frame
    cart_items: list[CartItem] = field(default_factory=list)
    offer: Money | None = None  # overrides the main listing's unit price


@dataclass(frozen=True)
class LineItem:
    code: str
    unit_price: Money
    quantity: int
    line_total: Money
    include_for: frozenset[TransactionRole]
    reversal: bool = False
    percentage: int | None = None  # bps, commission items only

    def __post_init__(self) -> None:
        if self.unit_price.currency != self.line_total.currency:
            raise ValueError(f"{self.code}: unit price and line total currencies differ")
        if self.percentage is None and self.line_total != self.unit_price * self.quantity:
            raise ValueError(
                f"{self.code}: line_total {self.line_total.amount} != "
                f"unit_price {self.unit_price.amount} x quantity {self.quantity}"
            )

    def is_for(self, role: TransactionRole) -> bool:
        return role in self.include_for

    def to_wire(self, with_totals: bool = True) -> dict[str, object]:
        """Marketplace API line item shape (camelCase, money as amount/currency).

        Submissions omit lineTotal and reversal; the platform computes them.
        """
        data: dict[str, object] = {
            "code": self.code,
            "unitPrice": {"amount": self.unit_price.amount, "currency": self.unit_price.currency},
            "includeFor": sorted(r.value for r in self.include_for),
        }
        if with_totals:
            data["lineTotal"] = {"amount": self.line_total.amount, "currency": self.line_total.currency}
            data["reversal"] = self.reversal
        if self.percentage is None:
            data["quantity"] = self.quantity
        else:
            data["percentage"] = self.percentage / 100
        return data
