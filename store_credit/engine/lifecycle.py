"""Installment lifecycle: UNPAID -> PAID, and the loan status derived from it."""

import logging
from datetime import datetime
from typing import Callable

from store_credit.engine.ledger import CreditLedger
from store_credit.exceptions import EntityNotFoundError
from store_credit.models import Loan, LoanStatus
from store_credit.store import CreditDataStore

logger = logging.getLogger(__name__)


class InstallmentLifecycle:
    """Mark installments paid and release the matching credit."""

    def __init__(
        self,
        store: CreditDataStore,
        ledger: CreditLedger,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.ledger = ledger
        self._clock = clock

    def pay_installment(self, loan: Loan, number: int) -> bool:
        """Pay installment ``number`` of ``loan``.

        Paying an installment that is already paid is a no-op.

        Returns
        -------
        bool
            True if the installment changed state, False for the no-op.

        Raises
        ------
        EntityNotFoundError
            If the loan's owner or the installment number does not exist.
        """
        installment = loan.installment(number)
        if installment is None:
            raise EntityNotFoundError(f"Installment {number} not found on loan {loan.loan_id}")
        customer = self.store.get_customer(loan.customer_id)

        if installment.paid:
            logger.debug("Installment %d of %s already paid", number, loan.loan_id)
            return False

        now = self._clock()
        installment.paid = True
        installment.paid_at = now
        self.ledger.decrease(customer, installment.amount)
        loan.updated_at = now

        if loan.status == LoanStatus.ACTIVE and loan.is_fully_paid:
            loan.status = LoanStatus.PAID
            logger.info(
                "Loan %s fully paid by %s", loan.loan_id, customer.customer_id,
                extra={"customer_id": customer.customer_id, "loan_id": loan.loan_id},
            )
        else:
            logger.info(
                "Installment %d/%d of %s paid (%s)",
                number, loan.installments_count, loan.loan_id, installment.amount,
                extra={"customer_id": customer.customer_id, "loan_id": loan.loan_id},
            )
        return True
