"""Catalog: read-only product views over the Product Ledger.

Every function here returns immutable `ProductCard` copies. Nothing in this
module can reach a command or a repository write.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.product.product import Product
from storefront.shared.errors import InvalidQuantity


@dataclass(frozen=True)
class ProductCard:
    product_id: str
    name: str
    description: str | None
    unit_cost: float
    available_quantity: int
    image_url: str | None

    @property
    def in_stock(self) -> bool:
        return self.available_quantity > 0

    @classmethod
    def from_product(cls, product: Product) -> "ProductCard":
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            unit_cost=product.unit_cost,
            available_quantity=product.available_quantity,
            image_url=product.image_url,
        )


def _repo():
    return current_domain.repository_for(Product)


def _cards(products) -> list[ProductCard]:
    return [ProductCard.from_product(product) for product in products]


def list_products() -> list[ProductCard]:
    return _cards(_repo().listing())


def get_product(product_id) -> ProductCard:
    return ProductCard.from_product(_repo().get_product(product_id))


def list_available() -> list[ProductCard]:
    return _cards(_repo().available())


def search(name: str) -> list[ProductCard]:
    """Products whose name contains `name`, ignoring case. A blank term matches nothing."""
    term = (name or "").strip()
    if not term:
        return []
    return _cards(_repo().search_by_name(term))


def max_cost(cost: float) -> list[ProductCard]:
    """Products priced at or below `cost`, cheapest first."""
    if cost is None or cost < 0:
        raise InvalidQuantity(f"Cost bound must be zero or more, got {cost!r}", field="cost")
    return _cards(_repo().priced_at_most(cost))
