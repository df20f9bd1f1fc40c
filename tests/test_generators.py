"""Tests for demo data generators."""

from decimal import Decimal

from store_credit.engine.calculator import round_currency
from store_credit.generators import CustomerGenerator
from store_credit.models import CustomerStatus, CustomerTier


class TestCustomerGenerator:
    """Tests for CustomerGenerator."""

    def test_generate_customer(self, seed: int) -> None:
        customer = CustomerGenerator(seed=seed).generate()

        assert customer.customer_id.startswith("cust-")
        assert len(customer.cpf) == 14  # XXX.XXX.XXX-XX
        assert customer.tier in CustomerTier
        assert customer.status == CustomerStatus.ACTIVE
        assert customer.used_credit == Decimal("0.00")

    def test_income_in_range(self, seed: int) -> None:
        for customer in CustomerGenerator(seed=seed).generate_batch(100):
            assert Decimal("1500") <= customer.monthly_income <= Decimal("30000")

    def test_limit_derived_from_income(self, seed: int) -> None:
        gen = CustomerGenerator(seed=seed, income_limit_ratio=Decimal("0.50"))

        for customer in gen.generate_batch(20):
            assert customer.credit_limit == round_currency(customer.monthly_income * Decimal("0.50"))

    def test_batch_unique_ids(self, seed: int) -> None:
        customers = list(CustomerGenerator(seed=seed).generate_batch(50))

        assert len({c.customer_id for c in customers}) == 50

    def test_reproducible(self) -> None:
        first = CustomerGenerator(seed=7).generate()
        second = CustomerGenerator(seed=7).generate()

        assert first.customer_id == second.customer_id
        assert first.name == second.name
        assert first.tier == second.tier

    def test_tier_mix(self, seed: int) -> None:
        tiers = {c.tier for c in CustomerGenerator(seed=seed).generate_batch(200)}

        assert tiers == set(CustomerTier)
