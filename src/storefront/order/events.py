"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was admitted against reserved stock, in Pending status."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    product_name: String()
    quantity: Integer(required=True)
    unit_cost: Float(required=True)
    status: String(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled. The stock it held may go back to the product."""

    __version__ = 1

    order_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_status: String(required=True)
    cancelled_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderRemoved:
    """An administrator deleted the order record."""

    __version__ = 1

    order_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    status: String(required=True)
    removed_at: DateTime(required=True)
