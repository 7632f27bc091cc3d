"""Pydantic schemas for order data and line item responses."""

from typing import Any

from pydantic import Field

from src.sf_common.enums import DeliveryMethod
from src.sf_common.money import Money
from src.sf_common.schemas import CamelModel
from src.sf_pricing.domain.line_items import payin_total, payout_total
from src.sf_pricing.domain.models import CartItem, FrameInfo, LineItem, OrderData
from src.sf_tax.application.schemas import ShippingAddressIn


class MoneyIn(CamelModel):
    amount: int
    currency: str

    def to_domain(self) -> Money:
        return Money(self.amount, self.currency)


class FrameInfoIn(CamelModel):
    selected_frame_label: str | None = None
    frame_price_in_subunits: int | None = Field(None, ge=0)

    def to_domain(self) -> FrameInfo | None:
        if not self.frame_price_in_subunits:
            return None
        return FrameInfo(self.selected_frame_label, self.frame_price_in_subunits)


class CartItemIn(CamelModel):
    id: str
    title: str | None = None
    quantity: int = 1
    price: MoneyIn | None = None
    image_url: str | None = None
    selected_frame_label: str | None = None
    frame_price_in_subunits: int | None = Field(None, ge=0)

    def to_domain(self) -> CartItem:
        return CartItem(
            id=self.id,
            title=self.title,
            quantity=self.quantity,
            price=self.price.to_domain() if self.price else None,
            image_url=self.image_url,
            selected_frame_label=self.selected_frame_label,
            frame_price_in_subunits=self.frame_price_in_subunits,
        )


class OrderDataIn(CamelModel):
    quantity: int = 1
    delivery_method: DeliveryMethod = DeliveryMethod.NONE
    unit_type: str | None = None
    frame_info: FrameInfoIn | None = None
    cart_items: list[CartItemIn] = Field(default_factory=list)
    # Negotiation
    offer_in_subunits: int | None = None
    actor: str | None = None  # parsed strictly by the checkout service
    expected_history_length: int | None = Field(None, ge=0)
    # Checkout
    currency: str | None = None
    shipping_details: ShippingAddressIn | None = None

    def to_domain(self, unit_type: str, offer: Money | None = None) -> OrderData:
        return OrderData(
            quantity=self.quantity,
            delivery_method=self.delivery_method,
            unit_type=unit_type,
            frame=self.frame_info.to_domain() if self.frame_info else None,
            cart_items=[item.to_domain() for item in self.cart_items],
            offer=offer,
        )


class LineItemsRequest(CamelModel):
    listing_id: str
    is_own_listing: bool = False
    order_data: OrderDataIn = Field(default_factory=OrderDataIn)


class MoneyOut(CamelModel):
    amount: int
    currency: str

    @classmethod
    def from_domain(cls, money: Money | None) -> "MoneyOut | None":
        return cls(amount=money.amount, currency=money.currency) if money else None


class LineItemsResponse(CamelModel):
    line_items: list[dict[str, Any]]
    payin_total: MoneyOut | None = None
    payout_total: MoneyOut | None = None

    @classmethod
    def from_line_items(cls, line_items: list[LineItem]) -> "LineItemsResponse":
        return cls(
            line_items=[item.to_wire() for item in line_items],
            payin_total=MoneyOut.from_domain(payin_total(line_items)),
            payout_total=MoneyOut.from_domain(payout_total(line_items)),
        )
