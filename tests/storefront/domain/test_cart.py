"""Tests for the Cart value object."""

import dataclasses

import pytest

from storefront.checkout.cart import Cart, CartLine
from storefront.shared.errors import InvalidQuantity


class TestCart:
    def test_of_keeps_caller_order(self):
        cart = Cart.of(("prod-b", 1), ("prod-a", 2), ("prod-b", 3))
        assert [line.product_id for line in cart] == ["prod-b", "prod-a", "prod-b"]
        assert len(cart) == 3

    def test_add_returns_a_new_cart(self):
        empty = Cart()
        cart = empty.add("prod-a", 2)
        assert len(empty) == 0
        assert cart.lines == (CartLine(product_id="prod-a", quantity=2),)

    def test_cart_is_immutable(self):
        cart = Cart.of(("prod-a", 1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            cart.lines = ()

    def test_validate_accepts_positive_quantities(self):
        Cart.of(("prod-a", 1), ("prod-b", 100)).validate()

    def test_validate_rejects_empty_cart(self):
        with pytest.raises(InvalidQuantity):
            Cart().validate()

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "3"])
    def test_validate_rejects_bad_quantity_anywhere(self, quantity):
        cart = Cart.of(("prod-a", 1), ("prod-b", quantity))
        with pytest.raises(InvalidQuantity):
            cart.validate()
