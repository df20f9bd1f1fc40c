"""Lending engine: pricing, loan creation, credit ledger and installment lifecycle."""

from store_credit.engine.calculator import Simulation, simulate
from store_credit.engine.ledger import CreditLedger
from store_credit.engine.lifecycle import InstallmentLifecycle
from store_credit.engine.loans import LoanFactory
from store_credit.engine.rates import RATE_TABLE, rate_for
from store_credit.engine.service import PortfolioMetrics, StoreCreditEngine

__all__ = [
    "CreditLedger",
    "InstallmentLifecycle",
    "LoanFactory",
    "PortfolioMetrics",
    "RATE_TABLE",
    "Simulation",
    "StoreCreditEngine",
    "rate_for",
    "simulate",
]
