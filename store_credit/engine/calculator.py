"""Fixed-payment (Price table) amortization calculator.

Pure functions: Decimal in, frozen dataclass out. No I/O, no mutation.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from store_credit.engine.rates import coerce_tier, rate_for
from store_credit.exceptions import InvalidArgumentError
from store_credit.models.enums import CustomerTier

TWO_PLACES = Decimal("0.01")
CURRENCY_ROUNDING = ROUND_HALF_UP


@dataclass(frozen=True)
class Simulation:
    """Result of an installment simulation."""

    principal: Decimal
    term_months: int
    tier: CustomerTier
    rate: Decimal
    monthly_payment: Decimal
    total_payback: Decimal
    rate_percent: Decimal  # e.g. Decimal("1.49")

    @property
    def total_interest(self) -> Decimal:
        return self.total_payback - self.principal


def round_currency(value: Decimal) -> Decimal:
    """Round to the currency minor unit (two places, half away from zero)."""
    return value.quantize(TWO_PLACES, rounding=CURRENCY_ROUNDING)


def to_amount(value: Decimal | int | float | str, name: str = "amount") -> Decimal:
    """Coerce a numeric input to Decimal without float artifacts."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be numeric, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidArgumentError(f"{name} must be numeric, got {value!r}") from None
    if not amount.is_finite():
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    return amount


def monthly_payment(principal: Decimal, rate: Decimal, term_months: int) -> Decimal:
    """Calculate the fixed monthly payment, rounded to cents.

    PMT = P * (r * (1+r)^n) / ((1+r)^n - 1)
    """
    factor = (1 + rate) ** term_months
    payment = principal * (rate * factor) / (factor - 1)
    return round_currency(payment)


def simulate(
    principal: Decimal | int | float | str,
    term_months: int,
    tier: CustomerTier | str,
) -> Simulation:
    """Simulate a financed purchase.

    The rounded monthly payment drives the total: ``total_payback`` is
    exactly ``monthly_payment * term_months``.

    Parameters
    ----------
    principal : Decimal | int | float | str
        Amount financed; must be positive.
    term_months : int
        Number of monthly installments; must be positive.
    tier : CustomerTier | str
        Customer tier used to look up the rate.

    Returns
    -------
    Simulation
        Payment, total and display rate.

    Raises
    ------
    InvalidArgumentError
        On non-positive principal or term, an unknown tier, a payment that
        rounds to zero, or a term too long to price.
    """
    amount = to_amount(principal, "principal")
    if amount <= 0:
        raise InvalidArgumentError(f"principal must be positive, got {amount}")
    if isinstance(term_months, bool) or not isinstance(term_months, int):
        raise InvalidArgumentError(f"term_months must be an integer, got {term_months!r}")
    if term_months <= 0:
        raise InvalidArgumentError(f"term_months must be positive, got {term_months}")

    tier = coerce_tier(tier)
    rate = rate_for(tier)
    try:
        payment = monthly_payment(amount, rate, term_months)
    except ArithmeticError as e:
        raise InvalidArgumentError(f"Cannot price {amount} over {term_months} months: {e!r}") from e
    if payment <= 0:
        raise InvalidArgumentError(f"principal {amount} is too small to finance over {term_months} months")

    return Simulation(
        principal=amount,
        term_months=term_months,
        tier=tier,
        rate=rate,
        monthly_payment=payment,
        total_payback=payment * term_months,
        rate_percent=round_currency(rate * 100),
    )
