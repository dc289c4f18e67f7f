"""Revenue figures derived from the captured order snapshots.

Totals only ever use the unit cost recorded on each order, so repricing or
removing a product never changes them. Amounts are summed as `Decimal` and
rounded to the cent once, at the end.
"""

from collections import defaultdict
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from storefront.order.order import Order, OrderStatus

CENT = Decimal("0.01")


def _to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def total_revenue(orders: Iterable[Order]) -> Decimal:
    """Sum of `quantity * unit_cost` across orders that were not cancelled."""
    total = sum(
        (order.line_total for order in orders if order.current_status != OrderStatus.CANCELLED),
        Decimal("0"),
    )
    return _to_cents(total)


def revenue_by_status(orders: Iterable[Order]) -> dict[str, Decimal]:
    """Order value grouped by status value, cancelled orders included."""
    totals: defaultdict[str, Decimal] = defaultdict(Decimal)
    for order in orders:
        totals[order.current_status.value] += order.line_total
    return {status: _to_cents(amount) for status, amount in totals.items()}
