"""Product Ledger stock operations: commands, handler and the locked entry points.

Callers go through `reserve_stock`, `release_stock`, `restock` and `set_stock`
rather than processing the commands directly. Each entry point holds the
product's lock for the full command, so the read, the check, the change and
the commit are one step as far as any other caller can tell.
"""

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import OutOfStock, require_non_negative_quantity, require_positive_quantity
from storefront.shared.locking import stock_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class ReserveStock:
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    order_id: Identifier()


@storefront.command(part_of="Product")
class ReleaseStock:
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    order_id: Identifier()


@storefront.command(part_of="Product")
class RestockProduct:
    product_id: Identifier(required=True)
    delta: Integer(required=True)


@storefront.command(part_of="Product")
class SetStockLevel:
    product_id: Identifier(required=True)
    quantity: Integer(required=True)


@storefront.command_handler(part_of=Product)
class StockHandler:
    @handle(ReserveStock)
    def reserve_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.reserve(command.quantity, order_id=command.order_id)
        repo.add(product)
        return {
            "product_id": str(product.id),
            "name": product.name,
            "unit_cost": product.unit_cost,
            "available_quantity": product.available_quantity,
        }

    @handle(ReleaseStock)
    def release_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.release(command.quantity, order_id=command.order_id)
        repo.add(product)
        return product.available_quantity

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.restock(command.delta)
        repo.add(product)
        return product.available_quantity

    @handle(SetStockLevel)
    def set_stock_level(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.set_stock(command.quantity)
        repo.add(product)
        return product.available_quantity


def reserve_stock(product_id, quantity, order_id=None) -> dict:
    """Atomically check and decrement a product's stock.

    Returns a snapshot of the product as it stood after the reservation:
    `product_id`, `name`, `unit_cost` and `available_quantity`.

    Raises `OutOfStock` when the shelf holds fewer than `quantity` units, and
    also when a concurrent writer got to the product first. Neither case is
    retried.
    """
    require_positive_quantity(quantity)
    with stock_locks.hold(product_id):
        try:
            snapshot = current_domain.process(
                ReserveStock(product_id=product_id, quantity=quantity, order_id=order_id),
                asynchronous=False,
            )
        except ExpectedVersionError:
            logger.warning("Stock reservation lost a concurrent update", product_id=str(product_id), quantity=quantity)
            raise OutOfStock(
                f"Stock for product {product_id} changed concurrently, reservation not applied",
                conflict=True,
            ) from None

    logger.info(
        "Stock reserved",
        product_id=str(product_id),
        order_id=order_id,
        quantity=quantity,
        available_quantity=snapshot["available_quantity"],
    )
    return snapshot


def release_stock(product_id, quantity, order_id=None) -> int:
    """Return stock held by an order to the shelf. Returns the new stock level."""
    require_positive_quantity(quantity)
    with stock_locks.hold(product_id):
        available = current_domain.process(
            ReleaseStock(product_id=product_id, quantity=quantity, order_id=order_id),
            asynchronous=False,
        )

    logger.info(
        "Stock released",
        product_id=str(product_id),
        order_id=order_id,
        quantity=quantity,
        available_quantity=available,
    )
    return available


def restock(product_id, delta) -> int:
    """Add `delta` units to a product's stock. Returns the new stock level."""
    require_positive_quantity(delta, field="delta")
    with stock_locks.hold(product_id):
        return current_domain.process(RestockProduct(product_id=product_id, delta=delta), asynchronous=False)


def set_stock(product_id, value) -> int:
    """Overwrite a product's stock with `value`. Returns the new stock level."""
    require_non_negative_quantity(value)
    with stock_locks.hold(product_id):
        return current_domain.process(SetStockLevel(product_id=product_id, quantity=value), asynchronous=False)
