"""Tests for the amortization calculator."""

from decimal import ROUND_HALF_UP, Decimal

import pytest

from store_credit.engine.calculator import (
    CURRENCY_ROUNDING,
    Simulation,
    monthly_payment,
    round_currency,
    simulate,
    to_amount,
)
from store_credit.exceptions import InvalidArgumentError
from store_credit.models import CustomerTier


class TestSimulateScenarios:
    """Known simulations."""

    def test_single_installment_normal(self) -> None:
        sim = simulate(1000, 1, CustomerTier.NORMAL)

        assert sim.rate == Decimal("0.0149")
        assert sim.monthly_payment == Decimal("1014.90")
        assert sim.total_payback == Decimal("1014.90")
        assert sim.rate_percent == Decimal("1.49")

    def test_single_installment_vip(self) -> None:
        sim = simulate(1000, 1, CustomerTier.VIP)

        assert sim.monthly_payment == Decimal("1008.90")
        assert sim.total_payback == Decimal("1008.90")
        assert sim.rate_percent == Decimal("0.89")

    def test_result_fields(self) -> None:
        sim = simulate("3000", 10, "CLUBE")

        assert isinstance(sim, Simulation)
        assert sim.principal == Decimal("3000")
        assert sim.term_months == 10
        assert sim.tier is CustomerTier.CLUBE
        assert sim.total_interest == sim.total_payback - Decimal("3000")

    def test_matches_float_formula(self) -> None:
        rate = 0.0149
        factor = (1 + rate) ** 12
        expected = 1000 * (rate * factor) / (factor - 1)

        sim = simulate(1000, 12, CustomerTier.NORMAL)

        assert abs(float(sim.monthly_payment) - expected) <= 0.005 + 1e-9


class TestSimulateProperties:
    """Properties that hold for every valid input."""

    @pytest.mark.parametrize("principal", ["1", "50", "999.99", "1234.56", "25000"])
    @pytest.mark.parametrize("tier", list(CustomerTier))
    def test_one_month_is_principal_plus_one_rate(self, principal: str, tier: CustomerTier) -> None:
        sim = simulate(principal, 1, tier)
        expected = (Decimal(principal) * (1 + sim.rate)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        assert sim.monthly_payment == expected
        assert sim.total_payback == sim.monthly_payment

    @pytest.mark.parametrize("term", [1, 2, 3, 6, 10, 12, 24, 48])
    @pytest.mark.parametrize("principal", ["100", "1500.50", "7321.13"])
    def test_total_is_exact_multiple_of_payment(self, principal: str, term: int) -> None:
        sim = simulate(principal, term, CustomerTier.NORMAL)

        assert sim.total_payback == sim.monthly_payment * term
        assert sim.monthly_payment == sim.monthly_payment.quantize(Decimal("0.01"))

    @pytest.mark.parametrize("term", [2, 6, 12, 36])
    def test_total_exceeds_principal(self, term: int) -> None:
        sim = simulate(1000, term, CustomerTier.VIP)

        assert sim.total_payback > Decimal("1000")
        assert sim.monthly_payment > Decimal("1000") / term

    def test_longer_term_costs_more(self) -> None:
        short = simulate(2000, 3, CustomerTier.NORMAL)
        long = simulate(2000, 12, CustomerTier.NORMAL)

        assert long.monthly_payment < short.monthly_payment
        assert long.total_payback > short.total_payback

    def test_vip_pays_less_than_normal(self) -> None:
        assert simulate(2000, 10, "VIP").total_payback < simulate(2000, 10, "NORMAL").total_payback

    def test_repeatable(self) -> None:
        assert simulate(1500, 6, "NORMAL") == simulate(1500, 6, "NORMAL")


class TestSimulateValidation:
    """Invalid inputs."""

    @pytest.mark.parametrize("principal", [0, -1, "-0.01", Decimal("0")])
    def test_non_positive_principal(self, principal: object) -> None:
        with pytest.raises(InvalidArgumentError, match="principal"):
            simulate(principal, 3, CustomerTier.NORMAL)  # type: ignore[arg-type]

    @pytest.mark.parametrize("term", [0, -3])
    def test_non_positive_term(self, term: int) -> None:
        with pytest.raises(InvalidArgumentError, match="term_months"):
            simulate(1000, term, CustomerTier.NORMAL)

    @pytest.mark.parametrize("term", [1.5, "3", True])
    def test_non_integer_term(self, term: object) -> None:
        with pytest.raises(InvalidArgumentError, match="term_months"):
            simulate(1000, term, CustomerTier.NORMAL)  # type: ignore[arg-type]

    def test_non_numeric_principal(self) -> None:
        with pytest.raises(InvalidArgumentError):
            simulate("mil reais", 3, CustomerTier.NORMAL)

    def test_unknown_tier(self) -> None:
        with pytest.raises(InvalidArgumentError):
            simulate(1000, 3, "PLATINUM")

    @pytest.mark.parametrize("principal", ["0.001", "0.004", Decimal("0.0049")])
    def test_sub_cent_principal_rejected(self, principal: object) -> None:
        with pytest.raises(InvalidArgumentError, match="too small"):
            simulate(principal, 1, CustomerTier.NORMAL)  # type: ignore[arg-type]

    def test_payment_rounding_to_zero_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="too small"):
            simulate("0.05", 12, CustomerTier.VIP)

    def test_smallest_payable_principal(self) -> None:
        assert simulate("0.01", 1, CustomerTier.NORMAL).monthly_payment == Decimal("0.01")

    def test_term_too_long_to_price(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Cannot price"):
            simulate(1000, 10**9, CustomerTier.NORMAL)


class TestRounding:
    """Currency rounding policy."""

    def test_policy_is_half_up(self) -> None:
        assert CURRENCY_ROUNDING == ROUND_HALF_UP

    def test_half_cent_rounds_away_from_zero(self) -> None:
        assert round_currency(Decimal("50.745")) == Decimal("50.75")
        assert round_currency(Decimal("50.725")) == Decimal("50.73")
        assert round_currency(Decimal("-50.745")) == Decimal("-50.75")

    def test_payment_uses_half_up(self) -> None:
        # 50 * 1.0149 = 50.745 exactly
        assert simulate(50, 1, CustomerTier.NORMAL).monthly_payment == Decimal("50.75")

    def test_monthly_payment_helper(self) -> None:
        assert monthly_payment(Decimal("1000"), Decimal("0.0149"), 1) == Decimal("1014.90")


class TestToAmount:
    """Tests for to_amount."""

    def test_float_has_no_binary_artifacts(self) -> None:
        assert to_amount(0.1) == Decimal("0.1")

    def test_decimal_passthrough(self) -> None:
        value = Decimal("12.34")
        assert to_amount(value) is value

    def test_bool_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            to_amount(True)

    def test_infinity_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            to_amount("Infinity")
