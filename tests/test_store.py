"""Tests for the in-memory credit data store."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from store_credit.exceptions import EntityNotFoundError, ReferentialIntegrityError
from store_credit.models import Installment, Loan, LoanStatus
from store_credit.store import CreditDataStore


def make_loan(loan_id: str, customer_id: str = "cust-001") -> Loan:
    return Loan(
        loan_id=loan_id,
        customer_id=customer_id,
        product_name="TV",
        principal=Decimal("100.00"),
        total_with_interest=Decimal("101.49"),
        interest_rate=Decimal("0.0149"),
        installments_count=1,
        created_at=datetime(2024, 3, 1, 10, 30),
        status=LoanStatus.ACTIVE,
        installments=[Installment(number=1, amount=Decimal("101.49"), due_date=date(2024, 3, 31))],
    )


class TestCreditDataStore:
    """Entity storage and relationship tracking."""

    def test_add_and_get(self, store: CreditDataStore) -> None:
        store.add_loan(make_loan("loan-1"))

        assert store.get_customer("cust-001").name == "Ana Souza"
        assert store.get_loan("loan-1").product_name == "TV"

    def test_loan_requires_customer(self, store: CreditDataStore) -> None:
        with pytest.raises(ReferentialIntegrityError):
            store.add_loan(make_loan("loan-1", customer_id="cust-missing"))

    def test_referential_error_is_not_found(self) -> None:
        assert issubclass(ReferentialIntegrityError, EntityNotFoundError)

    def test_missing_entities(self, store: CreditDataStore) -> None:
        with pytest.raises(EntityNotFoundError, match="cust-x"):
            store.get_customer("cust-x")
        with pytest.raises(EntityNotFoundError, match="loan-x"):
            store.get_loan("loan-x")

    def test_customer_loans_in_creation_order(self, store: CreditDataStore, customer_factory) -> None:
        store.add_customer(customer_factory("cust-002"))
        store.add_loan(make_loan("loan-b"))
        store.add_loan(make_loan("loan-x", customer_id="cust-002"))
        store.add_loan(make_loan("loan-a"))

        assert [l.loan_id for l in store.get_customer_loans("cust-001")] == ["loan-b", "loan-a"]
        assert store.get_customer_loans("cust-unknown") == []

    def test_re_adding_loan_does_not_duplicate_index(self, store: CreditDataStore) -> None:
        store.add_loan(make_loan("loan-1"))
        store.add_loan(make_loan("loan-1"))

        assert len(store.get_customer_loans("cust-001")) == 1

    def test_from_records(self, customer_factory) -> None:
        store = CreditDataStore.from_records([customer_factory()], [make_loan("loan-1"), make_loan("loan-2")])

        assert list(store.customers) == ["cust-001"]
        assert [l.loan_id for l in store.list_loans()] == ["loan-1", "loan-2"]

    def test_from_records_orphan_loan(self) -> None:
        with pytest.raises(ReferentialIntegrityError):
            CreditDataStore.from_records([], [make_loan("loan-1")])
