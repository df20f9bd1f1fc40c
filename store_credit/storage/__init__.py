"""Persistence backends for customers and loans."""

from store_credit.storage.base import InMemoryStorage, Storage
from store_credit.storage.json_file import JsonFileStorage
from store_credit.storage.postgres import PostgresStorage

__all__ = ["InMemoryStorage", "JsonFileStorage", "PostgresStorage", "Storage"]
