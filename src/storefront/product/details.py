"""Product detail edits: command, handler and the locked entry point.

Stock is never touched here, but the edit saves the whole aggregate, so it
takes the product's stock lock like every other write to a product.
"""

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import Conflict
from storefront.shared.locking import stock_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    unit_cost: Float()
    image_url: String(max_length=500)


@storefront.command_handler(part_of=Product)
class UpdateProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            unit_cost=command.unit_cost,
            image_url=command.image_url,
        )
        repo.add(product)


def update_product_details(product_id, name=None, description=None, unit_cost=None, image_url=None) -> None:
    """Edit a product's descriptive fields. Fields left as None keep their value.

    Raises NotFound for an unknown product and Conflict when another process
    saved the product between this edit's read and its write.
    """
    command = UpdateProductDetails(
        product_id=product_id,
        name=name,
        description=description,
        unit_cost=unit_cost,
        image_url=image_url,
    )
    with stock_locks.hold(product_id):
        try:
            current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            logger.warning("Product edit lost a concurrent update", product_id=str(product_id))
            raise Conflict(f"Product {product_id} changed concurrently, edit not applied") from None

    logger.info("Product details updated", product_id=str(product_id))
