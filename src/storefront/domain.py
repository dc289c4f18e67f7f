"""Storefront bounded context: Product Ledger, Order Records and Checkout.

Products carry the authoritative stock counters, orders are immutable
snapshots whose only moving part is their status, and checkout turns a
caller-owned cart into independent orders, one line item at a time.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
