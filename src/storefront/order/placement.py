"""Order placement: command and handler.

Placement only records the order. Stock must already have been reserved by
the Product Ledger; the checkout orchestrator is the one caller that does
both, in that sequence.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    order_id: Identifier()
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    product_name: String(max_length=255)
    quantity: Integer(required=True)
    unit_cost: Float(required=True)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.place(
            user_id=command.user_id,
            product_id=command.product_id,
            product_name=command.product_name,
            quantity=command.quantity,
            unit_cost=command.unit_cost,
            order_id=command.order_id,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
