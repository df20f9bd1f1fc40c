"""Customer generator for demo stores."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator

from store_credit.engine.calculator import round_currency
from store_credit.generators.base import BaseGenerator
from store_credit.models import Customer, CustomerStatus, CustomerTier


class CustomerGenerator(BaseGenerator):
    """Generate synthetic store-credit customers with zero used credit."""

    TIERS = list(CustomerTier)
    TIER_WEIGHTS = [0.70, 0.20, 0.10]

    INCOME_RANGE = (1500, 30000)  # monthly, BRL

    def __init__(
        self,
        seed: int | None = None,
        income_limit_ratio: Decimal = Decimal("0.30"),
    ) -> None:
        super().__init__(seed)
        self.income_limit_ratio = income_limit_ratio

    def generate(self) -> Customer:
        """Generate a single customer.

        Returns
        -------
        Customer
            Generated customer.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[Customer]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        Customer
            Generated customers.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> Customer:
        """Generate a single customer."""
        tier = random.choices(self.TIERS, weights=self.TIER_WEIGHTS, k=1)[0]

        # Log-normal income, ~3,000 median
        income = random.lognormvariate(mu=8.0, sigma=0.6)
        income = max(self.INCOME_RANGE[0], min(income, self.INCOME_RANGE[1]))
        monthly_income = round_currency(Decimal(str(income)))

        created_at = datetime.now() - timedelta(days=random.randint(0, 3 * 365))

        return Customer(
            customer_id=f"cust-{self.fake.uuid4()[:12]}",
            name=self.fake.name(),
            cpf=self.fake.cpf(),
            email=self.fake.email(),
            phone=self.fake.cellphone_number(),
            tier=tier,
            credit_limit=round_currency(monthly_income * self.income_limit_ratio),
            used_credit=Decimal("0.00"),
            monthly_income=monthly_income,
            address=self.fake.street_address(),
            status=CustomerStatus.ACTIVE,
            created_at=created_at,
        )
