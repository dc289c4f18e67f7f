"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across users
except the product ids seeded at test start.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    user_id: str | None = None
    order_ids: list[str] = field(default_factory=list)
    rejected_lines: int = 0


@dataclass
class OrderState:
    order_id: str | None = None
    current_status: str = "Pending"
