"""Repository for the Order aggregate: the Order Record Store's queries."""

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shared.errors import NotFound


@storefront.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        """Load an order or raise NotFound."""
        order = self.get_or_none(order_id) if order_id else None
        if order is None:
            raise NotFound(f"Order not found with id: {order_id}")
        return order

    def listing(self, user_id=None, status=None) -> list[Order]:
        """All orders, narrowed by owner and/or status when given. Newest first."""
        criteria = {}
        if user_id:
            criteria["user_id"] = str(user_id)
        if status:
            criteria["status"] = OrderStatus.parse(status).value

        queryset = self.query.limit(None)
        if criteria:
            queryset = queryset.filter(**criteria)
        return queryset.order_by("-created_at").all().items

    def remove_order(self, order: Order) -> None:
        """Hard-delete the order record."""
        self._dao.delete(order)
