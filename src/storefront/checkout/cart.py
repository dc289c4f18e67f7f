"""Cart: the caller-owned list of line items handed to checkout.

A cart is an immutable value. `add` returns a new cart, so nothing in the
engine keeps cart state between calls.
"""

from dataclasses import dataclass, field

from storefront.shared.errors import InvalidQuantity, require_positive_quantity


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class Cart:
    """Line items in the order the caller wants them processed."""

    lines: tuple[CartLine, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, *items) -> "Cart":
        """Build a cart from `(product_id, quantity)` pairs."""
        return cls(lines=tuple(CartLine(product_id=str(product_id), quantity=quantity) for product_id, quantity in items))

    def add(self, product_id, quantity) -> "Cart":
        return Cart(lines=self.lines + (CartLine(product_id=str(product_id), quantity=quantity),))

    def validate(self) -> None:
        """Raise InvalidQuantity unless the cart has lines and every quantity is a positive integer."""
        if not self.lines:
            raise InvalidQuantity("Cart has no line items", field="lines")
        for line in self.lines:
            require_positive_quantity(line.quantity)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)
