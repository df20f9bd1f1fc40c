"""Customer and loan data store with referential integrity."""

from dataclasses import dataclass, field

from store_credit.exceptions import EntityNotFoundError, ReferentialIntegrityError
from store_credit.models import Customer, Loan


@dataclass
class CreditDataStore:
    """In-memory store for customers and loans with relationship tracking."""

    customers: dict[str, Customer] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)

    # Relationship indexes
    _customer_loans: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_records(cls, customers: list[Customer], loans: list[Loan]) -> "CreditDataStore":
        """Build a store from loaded records, customers first."""
        store = cls()
        for customer in customers:
            store.add_customer(customer)
        for loan in loans:
            store.add_loan(loan)
        return store

    def add_customer(self, customer: Customer) -> None:
        """Add a customer to the store."""
        self.customers[customer.customer_id] = customer
        self._customer_loans.setdefault(customer.customer_id, [])

    def add_loan(self, loan: Loan) -> None:
        """Add a loan to the store."""
        if loan.customer_id not in self.customers:
            raise ReferentialIntegrityError(f"Customer {loan.customer_id} not found")

        if loan.loan_id not in self.loans:
            self._customer_loans[loan.customer_id].append(loan.loan_id)
        self.loans[loan.loan_id] = loan

    # Query methods
    def get_customer(self, customer_id: str) -> Customer:
        """Get a customer by id."""
        try:
            return self.customers[customer_id]
        except KeyError:
            raise EntityNotFoundError(f"Customer {customer_id} not found") from None

    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by id."""
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    def get_customer_loans(self, customer_id: str) -> list[Loan]:
        """Get all loans for a customer, in creation order."""
        loan_ids = self._customer_loans.get(customer_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def list_customers(self) -> list[Customer]:
        return list(self.customers.values())

    def list_loans(self) -> list[Loan]:
        return list(self.loans.values())
