"""Order aggregate: an immutable purchase snapshot with a status lifecycle.

An order records who bought which product, how many units, and the unit cost
and product name at the moment it was placed. After creation only the status
moves, and only along the edges of the transition table below.

State Machine:
    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING, CONFIRMED, PROCESSING, SHIPPED)
    DELIVERED and CANCELLED are terminal.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderRemoved, OrderStatusChanged
from storefront.shared.errors import InvalidTransition, require_positive_quantity


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value):
        """Accept a member, its value (`Shipped`) or its name (`SHIPPED`), case-insensitively."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for status in cls:
            if text.lower() in (status.value.lower(), status.name.lower()):
                return status
        raise InvalidTransition(f"Unknown order status: {value!r}")


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),  # Terminal
    OrderStatus.CANCELLED: frozenset(),  # Terminal
}

INITIAL_STATUS = OrderStatus.PENDING


def allowed_transitions(status: OrderStatus) -> frozenset[OrderStatus]:
    """Statuses an order in `status` may move to next."""
    return _VALID_TRANSITIONS[status]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _VALID_TRANSITIONS[current]


def is_terminal(status: OrderStatus) -> bool:
    return not _VALID_TRANSITIONS[status]


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_cost = Float(required=True, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=INITIAL_STATUS.value,
    )
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, product_id, quantity, unit_cost, product_name=None, order_id=None):
        """Create a Pending order from an admitted line item.

        `unit_cost` and `product_name` are the values the product had when its
        stock was reserved; later edits to the product do not reach the order.
        """
        require_positive_quantity(quantity)
        now = datetime.now(UTC)

        attributes = {
            "user_id": user_id,
            "product_id": product_id,
            "product_name": product_name,
            "quantity": quantity,
            "unit_cost": unit_cost,
            "status": INITIAL_STATUS.value,
            "created_at": now,
            "updated_at": now,
        }
        if order_id:
            attributes["id"] = order_id

        order = cls(**attributes)
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                product_id=str(product_id),
                product_name=product_name,
                quantity=quantity,
                unit_cost=unit_cost,
                status=order.status,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def line_total(self) -> Decimal:
        """Quantity times the captured unit cost, exact to the cent."""
        return Decimal(str(self.unit_cost)) * self.quantity

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = self.current_status
        if not can_transition(current, target_status):
            if is_terminal(current):
                raise InvalidTransition(
                    f"Order is {current.value}, a terminal status; cannot move to {target_status.value}"
                )
            raise InvalidTransition(f"Cannot transition from {current.value} to {target_status.value}")

    def transition_to(self, target_status) -> bool:
        """Move the order to `target_status`.

        Requesting the status the order already has is accepted and changes
        nothing, terminal statuses included: that check comes before the
        transition table. Returns True when the status actually changed.
        """
        target_status = OrderStatus.parse(target_status)
        current = self.current_status
        if target_status == current:
            return False

        self._assert_can_transition(target_status)

        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target_status.value,
                changed_at=now,
            )
        )
        if target_status == OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    product_id=str(self.product_id),
                    quantity=self.quantity,
                    previous_status=current.value,
                    cancelled_at=now,
                )
            )
        return True

    def remove(self):
        """Mark the order as deleted. The repository drops the record."""
        self.raise_(
            OrderRemoved(
                order_id=str(self.id),
                product_id=str(self.product_id),
                quantity=self.quantity,
                status=self.status,
                removed_at=datetime.now(UTC),
            )
        )
