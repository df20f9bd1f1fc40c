"""Enumeration types for store-credit entities."""

from enum import Enum


class CustomerTier(str, Enum):
    NORMAL = "NORMAL"
    CLUBE = "CLUBE"
    VIP = "VIP"


class CustomerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class LoanStatus(str, Enum):
    PENDING = "PENDING"  # reserved, never produced by the engine
    ACTIVE = "ACTIVE"
    PAID = "PAID"
    DEFAULTED = "DEFAULTED"  # reserved, never produced by the engine
