"""Checkout Orchestrator: turns a cart into independent orders, line by line.

Each line is its own unit of admission. Its stock is reserved on the Product
Ledger and only then is the order recorded. A line that fails is reported and
the next line is tried. Lines that already succeeded stand, whatever happens
to the lines after them. A line whose order cannot be recorded after its
stock was reserved hands that stock back and is reported as PlacementFailed.

Lines are handled in cart order. Two lines for the same product are judged
one after the other, each against the stock the previous one left behind.
"""

from dataclasses import dataclass
from uuid import uuid4

import structlog
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.checkout.cart import Cart, CartLine
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.product.stock import release_stock, reserve_stock
from storefront.shared.errors import (
    ErrorKind,
    InvalidQuantity,
    NotFound,
    OutOfStock,
    PlacementFailed,
    first_message,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LineResult:
    """Outcome of one line item: an order id when created, a reason otherwise."""

    product_id: str
    quantity: int
    order_id: str | None = None
    reason: ErrorKind | None = None
    message: str | None = None

    @property
    def created(self) -> bool:
        return self.order_id is not None


@dataclass(frozen=True)
class CheckoutResult:
    user_id: str
    lines: tuple[LineResult, ...]

    @property
    def success(self) -> bool:
        """True when at least one line became an order."""
        return any(line.created for line in self.lines)

    @property
    def rejected_count(self) -> int:
        return sum(1 for line in self.lines if not line.created)

    @property
    def created_order_ids(self) -> list[str]:
        return [line.order_id for line in self.lines if line.created]


def _rejected(line: CartLine, exc) -> LineResult:
    message = str(exc) if isinstance(exc, (NotFound, PlacementFailed)) else first_message(exc)
    return LineResult(product_id=line.product_id, quantity=line.quantity, reason=exc.kind, message=message)


def _hand_back(line: CartLine, order_id: str) -> None:
    try:
        release_stock(line.product_id, line.quantity, order_id=order_id)
    except NotFound:
        logger.warning(
            "Product no longer in ledger, reservation not handed back",
            order_id=order_id,
            product_id=line.product_id,
            quantity=line.quantity,
        )


def _admit(user_id: str, line: CartLine) -> LineResult:
    order_id = str(uuid4())
    try:
        snapshot = reserve_stock(line.product_id, line.quantity, order_id=order_id)
    except (OutOfStock, NotFound, InvalidQuantity) as exc:
        logger.info(
            "Line item rejected",
            user_id=user_id,
            product_id=line.product_id,
            quantity=line.quantity,
            reason=exc.kind.value,
        )
        return _rejected(line, exc)

    try:
        current_domain.process(
            PlaceOrder(
                order_id=order_id,
                user_id=user_id,
                product_id=line.product_id,
                product_name=snapshot["name"],
                quantity=line.quantity,
                unit_cost=snapshot["unit_cost"],
            ),
            asynchronous=False,
        )
    except Exception:
        # Hand the reservation back so the ledger matches the orders that exist
        logger.exception("Order placement failed after reservation", order_id=order_id, product_id=line.product_id)
        _hand_back(line, order_id)
        return _rejected(line, PlacementFailed(f"Order for product {line.product_id} could not be recorded"))

    logger.info("Order placed", user_id=user_id, order_id=order_id, product_id=line.product_id, quantity=line.quantity)
    return LineResult(product_id=line.product_id, quantity=line.quantity, order_id=order_id)


def checkout(user_id, cart: Cart) -> CheckoutResult:
    """Admit every line of `cart` for `user_id` and report each line's outcome.

    The cart's quantities and the user are checked before anything is
    reserved: an invalid quantity raises InvalidQuantity and an unknown user
    raises NotFound, with no stock touched.
    """
    cart.validate()
    user = current_domain.repository_for(User).get_user(user_id)
    user_id = str(user.id)

    results = tuple(_admit(user_id, line) for line in cart)
    result = CheckoutResult(user_id=user_id, lines=results)
    logger.info(
        "Checkout completed",
        user_id=user_id,
        lines=len(results),
        created=len(result.created_order_ids),
        rejected=result.rejected_count,
    )
    return result


def create_order(user_id, product_id, quantity) -> Order:
    """Single-line checkout. Returns the order or raises the line's failure."""
    result = checkout(user_id, Cart.of((product_id, quantity)))
    line = result.lines[0]
    if not line.created:
        raise _error_for(line)
    return current_domain.repository_for(Order).get_order(line.order_id)


def _error_for(line: LineResult):
    if line.reason == ErrorKind.NOT_FOUND:
        return NotFound(line.message)
    if line.reason == ErrorKind.INVALID_QUANTITY:
        return InvalidQuantity(line.message)
    if line.reason == ErrorKind.PLACEMENT_FAILED:
        return PlacementFailed(line.message)
    return OutOfStock(line.message)
