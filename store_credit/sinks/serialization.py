"""Shared serialization utilities for storage backends and sinks."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from store_credit.models import (
    Customer,
    CustomerStatus,
    CustomerTier,
    Installment,
    Loan,
    LoanStatus,
)


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def _datetime(value: str | datetime | None) -> datetime | None:
    if not value:
        return None
    return value if isinstance(value, datetime) else datetime.fromisoformat(value)


def _date(value: str | date) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


def customer_from_dict(data: dict) -> Customer:
    """Rebuild a Customer from its serialized form."""
    return Customer(
        customer_id=data["customer_id"],
        name=data["name"],
        cpf=data["cpf"],
        email=data["email"],
        phone=data["phone"],
        tier=CustomerTier(data["tier"]),
        credit_limit=Decimal(str(data["credit_limit"])),
        used_credit=Decimal(str(data.get("used_credit", "0.00"))),
        monthly_income=Decimal(str(data.get("monthly_income", "0.00"))),
        address=data.get("address", ""),
        status=CustomerStatus(data.get("status", CustomerStatus.ACTIVE.value)),
        created_at=_datetime(data.get("created_at")),
        updated_at=_datetime(data.get("updated_at")),
    )


def installment_from_dict(data: dict) -> Installment:
    """Rebuild an Installment from its serialized form."""
    return Installment(
        number=int(data["number"]),
        amount=Decimal(str(data["amount"])),
        due_date=_date(data["due_date"]),
        paid=bool(data.get("paid", False)),
        paid_at=_datetime(data.get("paid_at")),
    )


def loan_from_dict(data: dict) -> Loan:
    """Rebuild a Loan and its schedule from its serialized form."""
    return Loan(
        loan_id=data["loan_id"],
        customer_id=data["customer_id"],
        product_name=data["product_name"],
        principal=Decimal(str(data["principal"])),
        total_with_interest=Decimal(str(data["total_with_interest"])),
        interest_rate=Decimal(str(data["interest_rate"])),
        installments_count=int(data["installments_count"]),
        created_at=_datetime(data["created_at"]),
        status=LoanStatus(data["status"]),
        installments=[installment_from_dict(i) for i in data.get("installments", [])],
        updated_at=_datetime(data.get("updated_at")),
    )
