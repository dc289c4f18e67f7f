"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the ledger with its opening stock."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    unit_cost: Float(required=True)
    available_quantity: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Name, description, cost or image of a product changed. Stock did not."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    description: Text()
    unit_cost: Float(required=True)
    image_url: String()


@storefront.event(part_of="Product")
class StockReserved:
    """Stock was taken off the shelf to admit an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    available_quantity: Integer(required=True)
    reserved_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockReleased:
    """Stock held by a cancelled or removed order went back on the shelf."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    available_quantity: Integer(required=True)
    released_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRestocked:
    __version__ = 1

    product_id: Identifier(required=True)
    quantity_added: Integer(required=True)
    available_quantity: Integer(required=True)
    restocked_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockLevelSet:
    """An administrator overwrote the stock count."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    available_quantity: Integer(required=True)
    set_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    available_quantity: Integer(required=True)
    removed_at: DateTime(required=True)
