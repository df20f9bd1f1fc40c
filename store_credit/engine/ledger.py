"""Credit ledger: the only mutator of a customer's used credit."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

from store_credit.engine.calculator import to_amount
from store_credit.exceptions import InvalidArgumentError
from store_credit.models import Customer

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class CreditLedger:
    """Keep ``Customer.used_credit`` in step with outstanding obligations.

    The ledger does not check the credit limit on ``increase``; the loan
    factory performs that check before asking for credit.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock

    def increase(self, customer: Customer, amount: Decimal) -> Decimal:
        """Commit ``amount`` of the customer's limit. Returns the new used credit."""
        amount = self._validate(amount)
        before = customer.used_credit
        customer.used_credit = before + amount
        customer.updated_at = self._clock()
        logger.debug(
            "Credit increased for %s: %s -> %s (+%s)",
            customer.customer_id, before, customer.used_credit, amount,
        )
        return customer.used_credit

    def decrease(self, customer: Customer, amount: Decimal) -> Decimal:
        """Release ``amount`` of used credit, clamped at zero. Returns the new used credit."""
        amount = self._validate(amount)
        before = customer.used_credit
        customer.used_credit = max(ZERO, before - amount)
        customer.updated_at = self._clock()
        if before - amount < ZERO:
            logger.warning(
                "Credit release for %s clamped at zero: used %s, released %s",
                customer.customer_id, before, amount,
                extra={"customer_id": customer.customer_id},
            )
        else:
            logger.debug(
                "Credit decreased for %s: %s -> %s (-%s)",
                customer.customer_id, before, customer.used_credit, amount,
            )
        return customer.used_credit

    def available(self, customer: Customer) -> Decimal:
        return customer.credit_limit - customer.used_credit

    def can_afford(self, customer: Customer, amount: Decimal) -> bool:
        """Whether committing ``amount`` keeps used credit within the limit."""
        return customer.used_credit + amount <= customer.credit_limit

    @staticmethod
    def _validate(amount: Decimal) -> Decimal:
        amount = to_amount(amount)
        if amount < 0:
            raise InvalidArgumentError(f"Ledger amount must not be negative, got {amount}")
        return amount
