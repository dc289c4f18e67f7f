"""Order Lifecycle Manager: status transition command, handler and entry point.

`transition` serialises requests per order. Each request is judged against
the status left by the previous one, so of two racing requests only the one
that is still legal at its turn succeeds.

Cancelling an order gives its stock back to the product when the domain's
`RESTOCK_ON_CANCEL` setting is on. The release is a separate unit of work
that runs after the cancellation has committed; the two never share a
transaction.
"""

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.product.stock import release_stock
from storefront.shared.errors import InvalidTransition, NotFound
from storefront.shared.locking import order_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class TransitionOrder:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class TransitionOrderHandler:
    @handle(TransitionOrder)
    def transition_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        changed = order.transition_to(command.status)
        if changed:
            repo.add(order)
        return changed


def restock_on_cancel_enabled() -> bool:
    return bool(getattr(current_domain, "RESTOCK_ON_CANCEL", True))


def return_stock_for(order: Order) -> None:
    """Give an order's quantity back to its product, if the product still exists."""
    try:
        release_stock(order.product_id, order.quantity, order_id=str(order.id))
    except NotFound:
        logger.warning(
            "Product no longer in ledger, nothing to restock",
            order_id=str(order.id),
            product_id=str(order.product_id),
            quantity=order.quantity,
        )


def transition(order_id, target_status) -> Order:
    """Move an order to `target_status` and return the order as it now stands.

    Raises NotFound for an unknown order and InvalidTransition when the target
    is not a legal successor of the current status. Asking for the current
    status again succeeds without writing anything.
    """
    target = OrderStatus.parse(target_status)
    with order_locks.hold(order_id):
        try:
            changed = current_domain.process(
                TransitionOrder(order_id=order_id, status=target.value),
                asynchronous=False,
            )
        except ExpectedVersionError:
            logger.warning("Order transition lost a concurrent update", order_id=str(order_id), target=target.value)
            raise InvalidTransition(
                f"Order {order_id} changed concurrently, transition to {target.value} not applied"
            ) from None

        order = current_domain.repository_for(Order).get_order(order_id)

    if not changed:
        logger.debug("Order already in requested status", order_id=str(order_id), status=order.status)
        return order

    logger.info("Order status changed", order_id=str(order_id), status=order.status)
    if target == OrderStatus.CANCELLED and restock_on_cancel_enabled():
        return_stock_for(order)
    return order
