"""In-memory data store for maintaining entity relationships."""

from store_credit.store.memory import CreditDataStore

__all__ = ["CreditDataStore"]
