"""Demo store scenario: customers financing purchases and paying them down."""

from __future__ import annotations

import logging
import random
from decimal import Decimal

from store_credit.engine import StoreCreditEngine
from store_credit.exceptions import LimitExceededError
from store_credit.generators import CustomerGenerator
from store_credit.models import Loan

logger = logging.getLogger(__name__)


class DemoStoreScenario:
    """Populate a store through the engine.

    This scenario creates:
    - Customers across the three tiers, limits derived from income
    - Financed purchases for a share of them (some rejected by the limit check)
    - Installments paid in order for a share of the loans, some paid off
    """

    # name, min price, max price (BRL)
    PRODUCTS = [
        ("iPhone 13", 3000, 5000),
        ("Smart TV 50\"", 2000, 3500),
        ("Geladeira Frost Free", 2500, 4500),
        ("Notebook", 2500, 6000),
        ("Fone Bluetooth", 150, 600),
        ("Air Fryer", 300, 800),
        ("Liquidificador", 100, 300),
    ]
    TERMS = [1, 2, 3, 6, 10, 12]

    def __init__(
        self,
        num_customers: int = 50,
        loan_penetration: float = 0.60,
        payment_rate: float = 0.50,
        seed: int | None = None,
        engine: StoreCreditEngine | None = None,
    ) -> None:
        """Initialize demo store scenario.

        Parameters
        ----------
        num_customers : int
            Number of customers to generate.
        loan_penetration : float
            Share of customers that try to finance a purchase (0.0 to 1.0).
        payment_rate : float
            Share of loans with payments made (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        engine : StoreCreditEngine | None
            Engine to populate; a fresh in-memory engine when omitted.
            Records already in its store are kept.
        """
        self.num_customers = num_customers
        self.loan_penetration = loan_penetration
        self.payment_rate = payment_rate
        self.seed = seed
        self.engine = engine if engine is not None else StoreCreditEngine()
        self.rejected = 0

        if seed is not None:
            random.seed(seed)

        self._customer_gen = CustomerGenerator(
            seed=seed,
            income_limit_ratio=self.engine.config.income_limit_ratio,
        )

    def generate(self) -> StoreCreditEngine:
        """Generate all data for the demo store.

        Returns
        -------
        StoreCreditEngine
            Engine holding the generated customers and loans.
        """
        logger.info(
            "Starting demo store scenario: %d customers, %.0f%% financing",
            self.num_customers,
            self.loan_penetration * 100,
        )

        engine = self.engine
        loans = []

        with engine.batch():
            customer_ids = [
                engine.create_customer(
                    name=profile.name,
                    cpf=profile.cpf,
                    email=profile.email,
                    phone=profile.phone,
                    monthly_income=profile.monthly_income,
                    address=profile.address,
                    tier=profile.tier,
                    credit_limit=profile.credit_limit,
                ).customer_id
                for profile in self._customer_gen.generate_batch(self.num_customers)
            ]

            num_borrowers = int(len(customer_ids) * self.loan_penetration)
            for customer_id in random.sample(customer_ids, num_borrowers):
                loan = self._finance_purchase(engine, customer_id)
                if loan is not None:
                    loans.append(loan)

            for loan in loans:
                if random.random() < self.payment_rate:
                    paid = random.randint(1, loan.installments_count)
                    for number in range(1, paid + 1):
                        engine.pay_installment(loan.loan_id, number)

        metrics = engine.portfolio_metrics()
        logger.info(
            "Demo store ready: %d new loans (%d active overall), %d rejected, loaned %s",
            len(loans),
            metrics.active_loans_count,
            self.rejected,
            metrics.total_loaned,
        )
        return engine

    def _finance_purchase(self, engine: StoreCreditEngine, customer_id: str) -> Loan | None:
        name, low, high = random.choice(self.PRODUCTS)
        price = Decimal(random.randint(low, high))
        term = random.choice(self.TERMS)
        try:
            return engine.create_loan(customer_id, name, price, term)
        except LimitExceededError:
            self.rejected += 1
            logger.debug("Purchase of %s (%s) declined for %s", name, price, customer_id)
            return None
