"""Order removal: command, handler and the locked entry point.

Deleting an order that still holds stock (anything but Cancelled) gives that
stock back to the product under the same `RESTOCK_ON_CANCEL` setting that
governs cancellation.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.lifecycle import restock_on_cancel_enabled, return_stock_for
from storefront.order.order import Order, OrderStatus
from storefront.shared.locking import order_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class RemoveOrder:
    order_id: Identifier(required=True)


@storefront.command_handler(part_of=Order)
class RemoveOrderHandler:
    @handle(RemoveOrder)
    def remove_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        order.remove()
        repo.remove_order(order)
        return order


def remove_order(order_id) -> None:
    with order_locks.hold(order_id):
        order = current_domain.process(RemoveOrder(order_id=order_id), asynchronous=False)

    logger.info("Order removed", order_id=str(order_id), status=order.status)
    if order.current_status != OrderStatus.CANCELLED and restock_on_cancel_enabled():
        return_stock_for(order)
