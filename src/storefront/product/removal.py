"""Product removal: command, handler and the locked entry point.

Removal is a hard delete of the ledger entry. Orders that reference the
product keep the name and unit cost they captured when they were placed.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.locking import stock_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class RemoveProductHandler:
    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.remove()
        repo.remove_product(product)


def remove_product(product_id) -> None:
    with stock_locks.hold(product_id):
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    logger.info("Product removed from ledger", product_id=str(product_id))
