"""Monthly interest rate table by customer tier."""

from decimal import Decimal

from store_credit.exceptions import InvalidArgumentError
from store_credit.models.enums import CustomerTier

RATE_TABLE: dict[CustomerTier, Decimal] = {
    CustomerTier.NORMAL: Decimal("0.0149"),  # 1.49% a.m.
    CustomerTier.CLUBE: Decimal("0.0089"),  # 0.89% a.m.
    CustomerTier.VIP: Decimal("0.0089"),  # 0.89% a.m.
}


def coerce_tier(tier: CustomerTier | str) -> CustomerTier:
    """Convert a tier name to ``CustomerTier``, failing on unknown values."""
    if isinstance(tier, CustomerTier):
        return tier
    try:
        return CustomerTier(tier)
    except ValueError:
        raise InvalidArgumentError(f"Unknown customer tier: {tier!r}") from None


def rate_for(tier: CustomerTier | str) -> Decimal:
    """Return the monthly interest rate for ``tier``.

    Parameters
    ----------
    tier : CustomerTier | str
        Customer tier or its name.

    Returns
    -------
    Decimal
        Monthly rate as a fraction (0.0149 for 1.49%).

    Raises
    ------
    InvalidArgumentError
        If the tier is not one of the enumerated tiers.
    """
    return RATE_TABLE[coerce_tier(tier)]
