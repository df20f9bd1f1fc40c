"""Loan factory: turns a simulation into a registered loan."""

import logging
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable

from store_credit.config import EngineConfig
from store_credit.engine.calculator import Simulation, simulate
from store_credit.engine.ledger import CreditLedger
from store_credit.exceptions import InvalidArgumentError, InvalidEntityStateError, LimitExceededError
from store_credit.models import Customer, CustomerStatus, Installment, Loan, LoanStatus
from store_credit.store import CreditDataStore

logger = logging.getLogger(__name__)


def new_loan_id() -> str:
    return f"loan-{uuid.uuid4().hex[:12]}"


class LoanFactory:
    """Build loans with their installment schedule and register them.

    Every installment carries the same rounded payment; the last one does
    not absorb any remainder, so the schedule sums exactly to the total.
    """

    def __init__(
        self,
        store: CreditDataStore,
        ledger: CreditLedger,
        config: EngineConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_loan_id,
    ) -> None:
        self.store = store
        self.ledger = ledger
        self.config = config or EngineConfig()
        self._clock = clock
        self._id_factory = id_factory

    def create_loan(
        self,
        customer: Customer,
        product_name: str,
        principal: Decimal | int | float | str,
        term_months: int,
    ) -> Loan:
        """Finance a purchase for ``customer``.

        Parameters
        ----------
        customer : Customer
            Borrower; its current tier selects the rate.
        product_name : str
            Label of the financed product.
        principal : Decimal | int | float | str
            Amount financed.
        term_months : int
            Number of monthly installments.

        Returns
        -------
        Loan
            The registered ACTIVE loan.

        Raises
        ------
        InvalidArgumentError
            On a blank product name, non-positive principal or term.
        InvalidEntityStateError
            If the customer is blocked.
        LimitExceededError
            If the total payback does not fit in the available credit.
        """
        if not product_name or not product_name.strip():
            raise InvalidArgumentError("product_name must not be blank")
        if customer.status != CustomerStatus.ACTIVE:
            raise InvalidEntityStateError(
                f"Customer {customer.customer_id} is {customer.status.value} and cannot take new loans"
            )

        sim = simulate(principal, term_months, customer.tier)

        if self.config.enforce_credit_limit and not self.ledger.can_afford(customer, sim.total_payback):
            logger.warning(
                "Loan rejected for %s: total %s exceeds available credit %s",
                customer.customer_id, sim.total_payback, self.ledger.available(customer),
                extra={"customer_id": customer.customer_id},
            )
            raise LimitExceededError(
                f"Customer {customer.customer_id}: total {sim.total_payback} exceeds "
                f"available credit {self.ledger.available(customer)}"
            )

        loan = self.build_loan(customer, product_name.strip(), sim)
        self.store.add_loan(loan)
        self.ledger.increase(customer, sim.total_payback)

        logger.info(
            "Loan %s created for %s: %s x %d = %s at %s%% a.m.",
            loan.loan_id, customer.customer_id, sim.monthly_payment,
            sim.term_months, sim.total_payback, sim.rate_percent,
            extra={"customer_id": customer.customer_id, "loan_id": loan.loan_id},
        )
        return loan

    def build_loan(self, customer: Customer, product_name: str, sim: Simulation) -> Loan:
        """Assemble an ACTIVE loan from a simulation without registering it."""
        created_at = self._clock()
        return Loan(
            loan_id=self._id_factory(),
            customer_id=customer.customer_id,
            product_name=product_name,
            principal=sim.principal,
            total_with_interest=sim.total_payback,
            interest_rate=sim.rate,
            installments_count=sim.term_months,
            created_at=created_at,
            status=LoanStatus.ACTIVE,
            installments=self.build_schedule(created_at, sim),
        )

    def build_schedule(self, created_at: datetime, sim: Simulation) -> list[Installment]:
        interval = self.config.installment_interval_days
        return [
            Installment(
                number=i,
                amount=sim.monthly_payment,
                due_date=created_at.date() + timedelta(days=interval * i),
            )
            for i in range(1, sim.term_months + 1)
        ]
