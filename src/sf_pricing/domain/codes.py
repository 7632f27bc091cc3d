"""Line item codes (wire-stable) and helpers for cart-derived codes.

Cart items use the pattern: line-item/cart-item-{listingId}
"""

from src.sf_pricing.domain.models import CartItem

LINE_ITEM_PREFIX = "line-item/"
CART_ITEM_PREFIX = "line-item/cart-item-"

LINE_ITEM_ITEM = "line-item/item"
LINE_ITEM_NEGOTIATED_ITEM = "line-item/negotiatedItem"
LINE_ITEM_SHIPPING_FEE = "line-item/shipping-fee"
LINE_ITEM_FRAME = "line-item/frame"
LINE_ITEM_PROVIDER_COMMISSION = "line-item/provider-commission"
LINE_ITEM_CUSTOMER_COMMISSION = "line-item/customer-commission"
LINE_ITEM_TAX = "line-item/tax"
LINE_ITEM_ART_LEVY = "line-item/kunstavgift"

NEGOTIATED_UNIT_TYPE = "negotiatedItem"

# Fee and adjustment lines; every other line-item code is a purchased item
_FEE_CODES = frozenset({
    LINE_ITEM_SHIPPING_FEE,
    LINE_ITEM_FRAME,
    LINE_ITEM_PROVIDER_COMMISSION,
    LINE_ITEM_CUSTOMER_COMMISSION,
    LINE_ITEM_TAX,
    LINE_ITEM_ART_LEVY,
})


def unit_line_item_code(unit_type: str) -> str:
    return f"{LINE_ITEM_PREFIX}{unit_type}"


def is_base_line_item(code: str) -> bool:
    return code.startswith(LINE_ITEM_PREFIX) and code not in _FEE_CODES


def cart_item_code(listing_id: str) -> str:
    return f"{CART_ITEM_PREFIX}{listing_id}"


def is_cart_item_line_item(code: str | None) -> bool:
    return bool(code) and code.startswith(CART_ITEM_PREFIX)  # type: ignore[union-attr]


def extract_cart_item_id(code: str | None) -> str | None:
    """'line-item/cart-item-abc123' -> 'abc123'; None for non-cart codes."""
    if not is_cart_item_line_item(code):
        return None
    return code[len(CART_ITEM_PREFIX):]  # type: ignore[index]


def get_cart_item_from_line_item(code: str, cart_items: list[CartItem]) -> CartItem | None:
    listing_id = extract_cart_item_id(code)
    if not listing_id:
        return None
    return next((item for item in cart_items if item.id == listing_id), None)


def get_line_item_title(
    code: str, cart_items: list[CartItem], main_listing_title: str | None = None
) -> str:
    """Display title for a line item; cart titles include the selected frame."""
    if is_cart_item_line_item(code):
        cart_item = get_cart_item_from_line_item(code, cart_items)
        if cart_item is not None and cart_item.title:
            frame_info = (
                f" ({cart_item.selected_frame_label} Frame)"
                if cart_item.selected_frame_label
                else ""
            )
            return f"{cart_item.title}{frame_info}"
        return f"Item {extract_cart_item_id(code)[:8]}..."  # type: ignore[index]
    return main_listing_title or "Unknown item"
