"""Domain models for store credit."""

from store_credit.models.base import Event
from store_credit.models.customer import Customer
from store_credit.models.enums import CustomerStatus, CustomerTier, LoanStatus
from store_credit.models.loan import Installment, Loan

__all__ = [
    "Customer",
    "CustomerStatus",
    "CustomerTier",
    "Event",
    "Installment",
    "Loan",
    "LoanStatus",
]
