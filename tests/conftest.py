"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from store_credit.engine import StoreCreditEngine
from store_credit.engine.ledger import CreditLedger
from store_credit.models import Customer, CustomerTier, Event
from store_credit.storage import InMemoryStorage
from store_credit.store import CreditDataStore


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class RecordingSink:
    """Event sink that keeps everything it receives."""

    def __init__(self) -> None:
        self.events: list[Event] = []
        self.closed = False

    def publish(self, event: Event) -> None:
        self.events.append(event)

    def close(self) -> None:
        self.closed = True

    @property
    def types(self) -> list[str]:
        return [e.event_type for e in self.events]


def make_customer(
    customer_id: str = "cust-001",
    tier: CustomerTier = CustomerTier.NORMAL,
    credit_limit: str = "5000.00",
    used_credit: str = "0.00",
) -> Customer:
    return Customer(
        customer_id=customer_id,
        name="Ana Souza",
        cpf="111.111.111-11",
        email="ana@gmail.com",
        phone="11988888888",
        tier=tier,
        credit_limit=Decimal(credit_limit),
        used_credit=Decimal(used_credit),
        monthly_income=Decimal("2500.00"),
        address="Rua das Flores, 123",
        created_at=datetime(2024, 1, 1, 9, 0, 0),
    )


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 1, 10, 30, 0))


@pytest.fixture
def customer() -> Customer:
    """Normal-tier customer with a 5,000 limit and nothing used."""
    return make_customer()


@pytest.fixture
def store(customer: Customer) -> CreditDataStore:
    store = CreditDataStore()
    store.add_customer(customer)
    return store


@pytest.fixture
def ledger(clock: FixedClock) -> CreditLedger:
    return CreditLedger(clock=clock)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage(customers=[make_customer()])


@pytest.fixture
def engine(storage: InMemoryStorage, sink: RecordingSink, clock: FixedClock) -> StoreCreditEngine:
    """Engine over in-memory storage holding customer ``cust-001``."""
    return StoreCreditEngine(storage=storage, sinks=[sink], clock=clock)


@pytest.fixture
def customer_factory():
    """Build customers with overridable id, tier, limit and used credit."""
    return make_customer
