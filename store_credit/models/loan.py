"""Loan models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from store_credit.models.enums import LoanStatus


@dataclass
class Installment:
    """One scheduled payment of a loan (parcela)."""

    number: int  # 1, 2, 3, ...
    amount: Decimal
    due_date: date
    paid: bool = False
    paid_at: datetime | None = None


@dataclass
class Loan:
    """Purchase financed on store credit."""

    loan_id: str
    customer_id: str
    product_name: str
    principal: Decimal  # Amount financed
    total_with_interest: Decimal  # Amount to pay back
    interest_rate: Decimal  # Monthly rate snapshot (e.g., 0.0149 for 1.49%)
    installments_count: int
    created_at: datetime
    status: LoanStatus
    installments: list[Installment] = field(default_factory=list)
    updated_at: datetime | None = None

    def installment(self, number: int) -> Installment | None:
        """Return installment ``number`` or None if the schedule has no such entry."""
        for inst in self.installments:
            if inst.number == number:
                return inst
        return None

    @property
    def is_fully_paid(self) -> bool:
        return bool(self.installments) and all(inst.paid for inst in self.installments)

    @property
    def outstanding_amount(self) -> Decimal:
        return sum((inst.amount for inst in self.installments if not inst.paid), Decimal("0.00"))
