"""Product aggregate: the ledger entry holding a product's stock counter.

`available_quantity` is the single source of truth for stock. It moves only
through the methods below, each of which validates its argument before it
touches the counter, so a rejected request leaves the product unchanged.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.product.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductRemoved,
    ProductRestocked,
    StockLevelSet,
    StockReleased,
    StockReserved,
)
from storefront.shared.errors import (
    OutOfStock,
    require_non_negative_quantity,
    require_positive_quantity,
)


@storefront.aggregate
class Product:
    """A sellable product and its available stock."""

    name: String(required=True, max_length=255)
    description: Text()
    unit_cost: Float(required=True, min_value=0.0)
    available_quantity: Integer(default=0, min_value=0)
    image_url: String(max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def stock_cannot_go_negative(self):
        if self.available_quantity is not None and self.available_quantity < 0:
            raise ValidationError({"available_quantity": ["Available quantity cannot be negative"]})

    @classmethod
    def add(cls, name, unit_cost, available_quantity=0, description=None, image_url=None):
        """Add a new product to the ledger with its opening stock."""
        require_non_negative_quantity(available_quantity)
        now = datetime.now(UTC)

        product = cls(
            name=name,
            description=description,
            unit_cost=unit_cost,
            available_quantity=available_quantity,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                unit_cost=product.unit_cost,
                available_quantity=product.available_quantity,
                added_at=now,
            )
        )
        return product

    @property
    def in_stock(self) -> bool:
        return self.available_quantity > 0

    def can_reserve(self, quantity) -> bool:
        return self.available_quantity >= quantity

    def reserve(self, quantity, order_id=None):
        """Take `quantity` units off the shelf, or fail without touching stock."""
        require_positive_quantity(quantity)
        if not self.can_reserve(quantity):
            raise OutOfStock(f"Insufficient stock. Available: {self.available_quantity}, Requested: {quantity}")

        now = datetime.now(UTC)
        self.available_quantity -= quantity
        self.updated_at = now
        self.raise_(
            StockReserved(
                product_id=str(self.id),
                order_id=order_id,
                quantity=quantity,
                available_quantity=self.available_quantity,
                reserved_at=now,
            )
        )

    def release(self, quantity, order_id=None):
        """Put back stock that an order no longer holds."""
        require_positive_quantity(quantity)

        now = datetime.now(UTC)
        self.available_quantity += quantity
        self.updated_at = now
        self.raise_(
            StockReleased(
                product_id=str(self.id),
                order_id=order_id,
                quantity=quantity,
                available_quantity=self.available_quantity,
                released_at=now,
            )
        )

    def restock(self, delta):
        require_positive_quantity(delta, field="delta")

        now = datetime.now(UTC)
        self.available_quantity += delta
        self.updated_at = now
        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                quantity_added=delta,
                available_quantity=self.available_quantity,
                restocked_at=now,
            )
        )

    def set_stock(self, value):
        """Overwrite the stock counter with an absolute value."""
        require_non_negative_quantity(value)

        now = datetime.now(UTC)
        previous = self.available_quantity
        self.available_quantity = value
        self.updated_at = now
        self.raise_(
            StockLevelSet(
                product_id=str(self.id),
                previous_quantity=previous,
                available_quantity=value,
                set_at=now,
            )
        )

    def update_details(self, name=None, description=None, unit_cost=None, image_url=None):
        """Edit the descriptive fields. Orders already placed keep their own snapshot."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if unit_cost is not None:
            self.unit_cost = unit_cost
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                description=self.description,
                unit_cost=self.unit_cost,
                image_url=self.image_url,
            )
        )

    def remove(self):
        """Mark the product as leaving the ledger. The repository deletes the record."""
        self.raise_(
            ProductRemoved(
                product_id=str(self.id),
                name=self.name,
                available_quantity=self.available_quantity,
                removed_at=datetime.now(UTC),
            )
        )
