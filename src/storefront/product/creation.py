"""Product creation: command and handler."""

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    unit_cost: Float(required=True)
    available_quantity: Integer(default=0)
    description: Text()
    image_url: String(max_length=500)


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            unit_cost=command.unit_cost,
            available_quantity=command.available_quantity if command.available_quantity is not None else 0,
            description=command.description,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
