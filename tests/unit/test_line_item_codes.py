"""Tests for sf_pricing.domain.codes."""

from src.sf_pricing.domain.codes import (
    cart_item_code,
    extract_cart_item_id,
    get_cart_item_from_line_item,
    get_line_item_title,
    is_base_line_item,
    is_cart_item_line_item,
    unit_line_item_code,
)
from src.sf_pricing.domain.models import CartItem

CART = [
    CartItem(id="abcdef123456", title="Fjord at dusk", selected_frame_label="Oak"),
    CartItem(id="xyz", title="Untitled"),
]


class TestCodes:
    def test_unit_code(self) -> None:
        assert unit_line_item_code("item") == "line-item/item"
        assert unit_line_item_code("negotiatedItem") == "line-item/negotiatedItem"

    def test_cart_code_round_trip(self) -> None:
        code = cart_item_code("abc")
        assert code == "line-item/cart-item-abc"
        assert is_cart_item_line_item(code)
        assert extract_cart_item_id(code) == "abc"

    def test_non_cart_codes(self) -> None:
        assert not is_cart_item_line_item("line-item/item")
        assert not is_cart_item_line_item(None)
        assert extract_cart_item_id("line-item/shipping-fee") is None

    def test_base_line_items(self) -> None:
        assert is_base_line_item("line-item/item")
        assert is_base_line_item("line-item/cart-item-abc")
        assert not is_base_line_item("line-item/shipping-fee")
        assert not is_base_line_item("line-item/kunstavgift")
        assert not is_base_line_item("something-else")


class TestTitles:
    def test_lookup_cart_item(self) -> None:
        item = get_cart_item_from_line_item("line-item/cart-item-xyz", CART)
        assert item is not None and item.title == "Untitled"
        assert get_cart_item_from_line_item("line-item/item", CART) is None

    def test_title_with_frame(self) -> None:
        title = get_line_item_title("line-item/cart-item-abcdef123456", CART)
        assert title == "Fjord at dusk (Oak Frame)"

    def test_title_without_frame(self) -> None:
        assert get_line_item_title("line-item/cart-item-xyz", CART) == "Untitled"

    def test_unknown_cart_item_fallback(self) -> None:
        assert get_line_item_title("line-item/cart-item-0123456789", []) == "Item 01234567..."

    def test_main_listing_title(self) -> None:
        assert get_line_item_title("line-item/item", CART, "Main") == "Main"
        assert get_line_item_title("line-item/item", CART) == "Unknown item"
