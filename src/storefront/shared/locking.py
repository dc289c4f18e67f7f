"""Per-resource mutual exclusion for stock counters and order status.

A command's read, mutation and commit happen inside one `UnitOfWork`, so the
lock has to be held around the whole `current_domain.process(...)` call, not
inside the handler. Locks are keyed by resource identity: two products (or
two orders) never contend with each other.

The repository's optimistic version check stays in place underneath. The locks
only make sure that concurrent callers in this process queue up instead of
failing on a stale version.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLocks:
    """A registry that hands out one re-entrant lock per key.

    An entry lives only while some thread holds or waits for its lock; the
    last one out removes it, so the registry never outgrows the keys that are
    in use right now.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}
        self._holders: dict[str, int] = {}

    @contextmanager
    def hold(self, key) -> Iterator[None]:
        key = str(key)
        with self._guard:
            lock = self._locks.setdefault(key, threading.RLock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                if not self._holders[key]:
                    del self._holders[key]
                    del self._locks[key]

    def is_held(self, key) -> bool:
        """True while any thread holds, or waits for, the lock for `key`."""
        with self._guard:
            return str(key) in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Acquisition order is always order lock, then product lock
order_locks = KeyedLocks("order")
stock_locks = KeyedLocks("stock")
# Serialises registrations and email changes so uniqueness checks cannot interleave
email_locks = KeyedLocks("email")
