"""JSON file storage: one object per collection, keyed by id."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable

from store_credit.exceptions import StorageError
from store_credit.models import Customer, Loan
from store_credit.sinks.serialization import customer_from_dict, loan_from_dict, to_dict

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Persist customers and loans as ``customers.json`` and ``loans.json``."""

    CUSTOMERS_FILE = "customers.json"
    LOANS_FILE = "loans.json"

    def __init__(self, data_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file storage.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding the JSON files; created if missing.
        pretty : bool
            Pretty-print JSON output.
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty

    def load_customers(self) -> list[Customer]:
        return self._load(self.CUSTOMERS_FILE, customer_from_dict)

    def load_loans(self) -> list[Loan]:
        return self._load(self.LOANS_FILE, loan_from_dict)

    def save_customers(self, customers: list[Customer]) -> None:
        self._save(self.CUSTOMERS_FILE, {c.customer_id: to_dict(c) for c in customers})

    def save_loans(self, loans: list[Loan]) -> None:
        self._save(self.LOANS_FILE, {loan.loan_id: to_dict(loan) for loan in loans})

    def _load(self, filename: str, decode: Callable[[dict], Any]) -> list[Any]:
        file_path = self.data_dir / filename
        if not file_path.exists():
            return []

        try:
            with open(file_path, encoding="utf-8") as f:
                records = json.load(f)
            items = [decode(record) for record in records.values()]
        except (json.JSONDecodeError, ArithmeticError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Corrupt store file {file_path}: {e}") from e

        logger.debug("Loaded %d records from %s", len(items), file_path)
        return items

    def _save(self, filename: str, data: dict[str, dict]) -> None:
        file_path = self.data_dir / filename
        tmp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
            os.replace(tmp_path, file_path)
        except OSError as e:
            raise StorageError(f"Could not write {file_path}: {e}") from e

        logger.debug("Saved %d records to %s", len(data), file_path)
