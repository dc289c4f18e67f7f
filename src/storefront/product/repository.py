"""Repository for the Product aggregate, with the ledger's read queries.

Reads run against a snapshot of the store taken under the provider lock, so a
reservation is either fully visible to them or not at all.
"""

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import NotFound


@storefront.repository(part_of=Product)
class ProductRepository:
    def get_product(self, product_id) -> Product:
        """Load a product or raise NotFound."""
        product = self.get_or_none(product_id) if product_id else None
        if product is None:
            raise NotFound(f"Product not found with id: {product_id}")
        return product

    def listing(self) -> list[Product]:
        return self.query.limit(None).order_by("name").all().items

    def available(self) -> list[Product]:
        """Products with at least one unit on the shelf."""
        return self.query.limit(None).filter(available_quantity__gt=0).order_by("name").all().items

    def search_by_name(self, term: str) -> list[Product]:
        """Case-insensitive substring match on the product name."""
        return self.query.limit(None).filter(name__icontains=term).order_by("name").all().items

    def priced_at_most(self, max_cost: float) -> list[Product]:
        return self.query.limit(None).filter(unit_cost__lte=max_cost).order_by("unit_cost").all().items

    def remove_product(self, product: Product) -> None:
        """Hard-delete the ledger entry."""
        self._dao.delete(product)
