"""Customer model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from store_credit.models.enums import CustomerStatus, CustomerTier


@dataclass
class Customer:
    """Store-credit customer.

    ``used_credit`` is owned by the credit ledger; callers must not assign it
    directly.
    """

    customer_id: str
    name: str
    cpf: str
    email: str
    phone: str
    tier: CustomerTier
    credit_limit: Decimal
    used_credit: Decimal = Decimal("0.00")
    monthly_income: Decimal = Decimal("0.00")
    address: str = ""
    status: CustomerStatus = CustomerStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def available_credit(self) -> Decimal:
        """Credit still available under the limit."""
        return self.credit_limit - self.used_credit
