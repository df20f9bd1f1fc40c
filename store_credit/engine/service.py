"""Store-credit engine: the entry point used by presentation code."""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterator

from store_credit.config import EngineConfig, StoreCreditConfig
from store_credit.engine import calculator, rates
from store_credit.engine.calculator import Simulation, round_currency, to_amount
from store_credit.engine.ledger import CreditLedger
from store_credit.engine.lifecycle import InstallmentLifecycle
from store_credit.engine.loans import LoanFactory
from store_credit.engine.locks import CustomerLocks
from store_credit.exceptions import InvalidArgumentError, LimitExceededError
from store_credit.models import (
    Customer,
    CustomerStatus,
    CustomerTier,
    Event,
    Loan,
    LoanStatus,
)
from store_credit.sinks.serialization import to_dict
from store_credit.storage import InMemoryStorage, JsonFileStorage
from store_credit.store import CreditDataStore

if TYPE_CHECKING:
    from store_credit.sinks import EventSink
    from store_credit.storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioMetrics:
    """Headline numbers for the store's credit portfolio."""

    total_customers: int
    active_loans_count: int
    total_loaned: Decimal
    projected_profit: Decimal


def new_customer_id() -> str:
    return f"cust-{uuid.uuid4().hex[:12]}"


class StoreCreditEngine:
    """Simulate, grant and collect store-credit loans.

    Every mutating call holds the customer's lock for the whole
    transaction, then commits the store through the storage backend and
    publishes the resulting events. Accessors return copies so callers
    cannot bypass the ledger.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        sinks: list[EventSink] | None = None,
        config: EngineConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or EngineConfig()
        self.storage = storage if storage is not None else InMemoryStorage()
        self.sinks = list(sinks or [])
        self._clock = clock

        self.store = CreditDataStore.from_records(
            self.storage.load_customers(),
            self.storage.load_loans(),
        )
        self.ledger = CreditLedger(clock=clock)
        self.loan_factory = LoanFactory(self.store, self.ledger, self.config, clock=clock)
        self.lifecycle = InstallmentLifecycle(self.store, self.ledger, clock=clock)

        self._locks = CustomerLocks()
        self._store_lock = threading.RLock()
        self._local = threading.local()

        logger.info(
            "Store-credit engine ready: %d customers, %d loans",
            len(self.store.customers),
            len(self.store.loans),
        )

    @classmethod
    def from_config(cls, config: StoreCreditConfig) -> StoreCreditEngine:
        """Build an engine with the storage backend and sink named in ``config``."""
        storage: Storage
        if config.storage.backend == "json":
            storage = JsonFileStorage(config.storage.json_dir, pretty=config.storage.pretty_json)
        elif config.storage.backend == "postgres":
            from store_credit.storage.postgres import PostgresStorage

            pg = PostgresStorage(config.postgres)
            pg.ensure_schema()
            storage = pg
        else:
            storage = InMemoryStorage()

        sinks: list[EventSink] = []
        if config.event_sink == "console":
            from store_credit.sinks import ConsoleSink

            sinks.append(ConsoleSink())
        elif config.event_sink == "kafka":
            from store_credit.sinks import KafkaSink

            sinks.append(KafkaSink(config.kafka))

        return cls(storage=storage, sinks=sinks, config=config.engine)

    # Pricing (pure)
    def rate_for(self, tier: CustomerTier | str) -> Decimal:
        return rates.rate_for(tier)

    def simulate(
        self,
        principal: Decimal | int | float | str,
        term_months: int,
        tier: CustomerTier | str,
    ) -> Simulation:
        return calculator.simulate(principal, term_months, tier)

    def simulate_for(
        self,
        customer_id: str,
        principal: Decimal | int | float | str,
        term_months: int,
    ) -> Simulation:
        """Simulate at the customer's current tier without touching any state."""
        return calculator.simulate(principal, term_months, self.store.get_customer(customer_id).tier)

    # Customers
    def create_customer(
        self,
        name: str,
        cpf: str,
        email: str,
        phone: str,
        monthly_income: Decimal | int | float | str,
        address: str = "",
        tier: CustomerTier | str = CustomerTier.NORMAL,
        credit_limit: Decimal | int | float | str | None = None,
    ) -> Customer:
        """Register a customer with zero used credit.

        Without an explicit ``credit_limit`` the limit is
        ``monthly_income * income_limit_ratio``.
        """
        if not name or not name.strip():
            raise InvalidArgumentError("name must not be blank")
        income = to_amount(monthly_income, "monthly_income")
        if income < 0:
            raise InvalidArgumentError(f"monthly_income must not be negative, got {income}")
        if credit_limit is None:
            limit = round_currency(income * self.config.income_limit_ratio)
        else:
            limit = round_currency(to_amount(credit_limit, "credit_limit"))
        if limit < 0:
            raise InvalidArgumentError(f"credit_limit must not be negative, got {limit}")

        now = self._clock()
        customer = Customer(
            customer_id=new_customer_id(),
            name=name.strip(),
            cpf=cpf,
            email=email,
            phone=phone,
            tier=rates.coerce_tier(tier),
            credit_limit=limit,
            used_credit=Decimal("0.00"),
            monthly_income=round_currency(income),
            address=address,
            status=CustomerStatus.ACTIVE,
            created_at=now,
        )

        with self._locks.hold(customer.customer_id):
            with self._store_lock:
                self.store.add_customer(customer)
            self._record("customer.created", customer.customer_id, to_dict(customer))
            logger.info(
                "Customer %s created with limit %s", customer.customer_id, limit,
                extra={"customer_id": customer.customer_id},
            )
            self.commit()
        return copy.deepcopy(customer)

    def update_tier(self, customer_id: str, tier: CustomerTier | str) -> Customer:
        """Change a customer's tier; existing loans keep their rate snapshot."""
        new_tier = rates.coerce_tier(tier)
        customer = self.store.get_customer(customer_id)
        with self._locks.hold(customer_id):
            old_tier = customer.tier
            customer.tier = new_tier
            customer.updated_at = self._clock()
            self._record(
                "customer.tier_changed",
                customer_id,
                {"customer_id": customer_id, "from": old_tier.value, "to": new_tier.value},
            )
            logger.info("Customer %s tier %s -> %s", customer_id, old_tier.value, new_tier.value)
            self.commit()
            return copy.deepcopy(customer)

    def update_credit_limit(
        self,
        customer_id: str,
        credit_limit: Decimal | int | float | str,
    ) -> Customer:
        """Change a customer's limit; it may not drop below the credit in use."""
        limit = round_currency(to_amount(credit_limit, "credit_limit"))
        if limit < 0:
            raise InvalidArgumentError(f"credit_limit must not be negative, got {limit}")

        customer = self.store.get_customer(customer_id)
        with self._locks.hold(customer_id):
            if limit < customer.used_credit:
                raise LimitExceededError(
                    f"Customer {customer_id}: limit {limit} is below used credit {customer.used_credit}"
                )
            old_limit = customer.credit_limit
            customer.credit_limit = limit
            customer.updated_at = self._clock()
            self._record(
                "customer.limit_changed",
                customer_id,
                {"customer_id": customer_id, "from": str(old_limit), "to": str(limit)},
            )
            logger.info("Customer %s limit %s -> %s", customer_id, old_limit, limit)
            self.commit()
            return copy.deepcopy(customer)

    def update_status(self, customer_id: str, status: CustomerStatus | str) -> Customer:
        """Block or reactivate a customer. Blocked customers can pay but not borrow."""
        try:
            new_status = CustomerStatus(status)
        except ValueError:
            raise InvalidArgumentError(f"Unknown customer status: {status!r}") from None

        customer = self.store.get_customer(customer_id)
        with self._locks.hold(customer_id):
            customer.status = new_status
            customer.updated_at = self._clock()
            self._record(
                "customer.status_changed",
                customer_id,
                {"customer_id": customer_id, "status": new_status.value},
            )
            self.commit()
            return copy.deepcopy(customer)

    def get_customer(self, customer_id: str) -> Customer:
        return copy.deepcopy(self.store.get_customer(customer_id))

    def list_customers(self) -> list[Customer]:
        with self._store_lock:
            return copy.deepcopy(self.store.list_customers())

    def available_credit(self, customer_id: str) -> Decimal:
        return self.ledger.available(self.store.get_customer(customer_id))

    # Loans
    def create_loan(
        self,
        customer_id: str,
        product_name: str,
        principal: Decimal | int | float | str,
        term_months: int,
    ) -> Loan:
        """Finance a purchase at the customer's current tier.

        Raises
        ------
        EntityNotFoundError
            If the customer does not exist.
        InvalidArgumentError
            On invalid amounts or terms.
        InvalidEntityStateError
            If the customer is blocked.
        LimitExceededError
            If the total payback exceeds the available credit.
        """
        customer = self.store.get_customer(customer_id)
        with self._locks.hold(customer_id):
            with self._store_lock:
                loan = self.loan_factory.create_loan(customer, product_name, principal, term_months)
            self._record("loan.created", loan.loan_id, to_dict(loan))
            self.commit()
            return copy.deepcopy(loan)

    def pay_installment(self, loan_id: str, number: int) -> Loan:
        """Pay one installment. Paying an already-paid installment changes nothing.

        Raises
        ------
        EntityNotFoundError
            If the loan or the installment number does not exist.
        """
        loan = self.store.get_loan(loan_id)
        with self._locks.hold(loan.customer_id):
            if self.lifecycle.pay_installment(loan, number):
                installment = loan.installment(number)
                self._record(
                    "installment.paid",
                    loan_id,
                    {
                        "loan_id": loan_id,
                        "customer_id": loan.customer_id,
                        "number": number,
                        "amount": str(installment.amount),
                        "paid_at": installment.paid_at.isoformat(),
                    },
                )
                if loan.status == LoanStatus.PAID:
                    self._record(
                        "loan.paid",
                        loan_id,
                        {"loan_id": loan_id, "customer_id": loan.customer_id},
                    )
                self.commit()
            return copy.deepcopy(loan)

    def get_loan(self, loan_id: str) -> Loan:
        return copy.deepcopy(self.store.get_loan(loan_id))

    def list_loans(self, customer_id: str | None = None) -> list[Loan]:
        """All loans, or only those of ``customer_id``, in creation order."""
        with self._store_lock:
            if customer_id is None:
                return copy.deepcopy(self.store.list_loans())
            return copy.deepcopy(self.store.get_customer_loans(customer_id))

    def portfolio_metrics(self) -> PortfolioMetrics:
        with self._store_lock:
            loans = self.store.list_loans()
            total_loaned = sum((loan.principal for loan in loans), Decimal("0.00"))
            expected_return = sum((loan.total_with_interest for loan in loans), Decimal("0.00"))
            return PortfolioMetrics(
                total_customers=len(self.store.customers),
                active_loans_count=sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE),
                total_loaned=total_loaned,
                projected_profit=expected_return - total_loaned,
            )

    # Persistence and events
    @contextmanager
    def batch(self) -> Iterator[None]:
        """Defer commits made by this thread until the outermost block exits.

        The batch only coalesces writes; it is not a transaction. Each
        operation inside it is still applied, or rejected, on its own.
        """
        self._local.depth = self._batch_depth + 1
        try:
            yield
        finally:
            self._local.depth -= 1
            if self._local.depth == 0:
                self.commit()

    def commit(self) -> None:
        """Write the whole store through the storage backend, then publish pending events.

        Inside ``batch()`` this is deferred to the end of the batch.
        """
        if self._batch_depth:
            return

        with self._store_lock:
            self.storage.save_customers(self.store.list_customers())
            self.storage.save_loans(self.store.list_loans())

        # An event leaves the queue only once every sink accepted it
        pending = self._pending_events
        while pending:
            for sink in self.sinks:
                sink.publish(pending[0])
            pending.pop(0)

    def close(self) -> None:
        """Close sinks and the storage backend if it holds a connection."""
        for sink in self.sinks:
            sink.close()
        close = getattr(self.storage, "close", None)
        if close is not None:
            close()

    @property
    def _batch_depth(self) -> int:
        return getattr(self._local, "depth", 0)

    @property
    def _pending_events(self) -> list[Event]:
        if not hasattr(self._local, "pending"):
            self._local.pending = []
        return self._local.pending

    def _record(self, event_type: str, subject: str, data: dict) -> None:
        self._pending_events.append(
            Event(
                event_id=str(uuid.uuid4()),
                event_type=event_type,
                event_time=self._clock(),
                source=self.config.event_source,
                subject=subject,
                data=data,
            )
        )
