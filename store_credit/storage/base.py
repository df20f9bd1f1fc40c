"""Storage protocol and the in-memory backend."""

import copy
from typing import Protocol

from store_credit.models import Customer, Loan


class Storage(Protocol):
    """Persistence collaborator used by the engine.

    ``save_*`` receives the complete collection every time; backends replace
    or upsert, they never append.
    """

    def load_customers(self) -> list[Customer]: ...

    def load_loans(self) -> list[Loan]: ...

    def save_customers(self, customers: list[Customer]) -> None: ...

    def save_loans(self, loans: list[Loan]) -> None: ...


class InMemoryStorage:
    """Keep deep-copied snapshots of the last saved collections."""

    def __init__(
        self,
        customers: list[Customer] | None = None,
        loans: list[Loan] | None = None,
    ) -> None:
        self._customers = copy.deepcopy(customers or [])
        self._loans = copy.deepcopy(loans or [])
        self.save_count = 0

    def load_customers(self) -> list[Customer]:
        return copy.deepcopy(self._customers)

    def load_loans(self) -> list[Loan]:
        return copy.deepcopy(self._loans)

    def save_customers(self, customers: list[Customer]) -> None:
        self._customers = copy.deepcopy(customers)
        self.save_count += 1

    def save_loans(self, loans: list[Loan]) -> None:
        self._loans = copy.deepcopy(loans)
