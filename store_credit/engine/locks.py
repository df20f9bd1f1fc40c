"""Per-customer mutual exclusion."""

import threading
from contextlib import contextmanager
from typing import Iterator


class CustomerLocks:
    """Registry of re-entrant locks, one per customer id."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def get(self, customer_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(customer_id)
            if lock is None:
                lock = self._locks[customer_id] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, customer_id: str) -> Iterator[None]:
        """Hold the customer's lock for the duration of the block."""
        lock = self.get(customer_id)
        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
