"""PostgreSQL storage backend."""

import logging
from typing import Any

from store_credit.config import PostgresConfig
from store_credit.exceptions import StorageError
from store_credit.models import Customer, Loan
from store_credit.sinks.serialization import customer_from_dict, loan_from_dict

logger = logging.getLogger(__name__)


class PostgresStorage:
    """Persist customers, loans and installments in PostgreSQL.

    Saves are upserts keyed by id; rows are never deleted, matching the
    entity lifecycles (customers and loans are never removed).
    """

    TABLE_COLUMNS = {
        "customers": [
            "customer_id", "name", "cpf", "email", "phone", "tier", "credit_limit",
            "used_credit", "monthly_income", "address", "status", "created_at", "updated_at",
        ],
        "loans": [
            "loan_id", "customer_id", "product_name", "principal", "total_with_interest",
            "interest_rate", "installments_count", "created_at", "status", "updated_at",
        ],
        "installments": ["loan_id", "number", "amount", "due_date", "paid", "paid_at"],
    }

    PRIMARY_KEYS = {
        "customers": ["customer_id"],
        "loans": ["loan_id"],
        "installments": ["loan_id", "number"],
    }

    SCHEMA = [
        """
        CREATE TABLE IF NOT EXISTS customers (
            customer_id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            cpf TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT NOT NULL,
            tier TEXT NOT NULL,
            credit_limit NUMERIC(15, 2) NOT NULL CHECK (credit_limit >= 0),
            used_credit NUMERIC(15, 2) NOT NULL CHECK (used_credit >= 0),
            monthly_income NUMERIC(15, 2) NOT NULL,
            address TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL,
            created_at TIMESTAMP,
            updated_at TIMESTAMP
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS loans (
            loan_id TEXT PRIMARY KEY,
            customer_id TEXT NOT NULL REFERENCES customers (customer_id),
            product_name TEXT NOT NULL,
            principal NUMERIC(15, 2) NOT NULL,
            total_with_interest NUMERIC(15, 2) NOT NULL,
            interest_rate NUMERIC(8, 6) NOT NULL,
            installments_count INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL,
            status TEXT NOT NULL,
            updated_at TIMESTAMP
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS installments (
            loan_id TEXT NOT NULL REFERENCES loans (loan_id),
            number INTEGER NOT NULL,
            amount NUMERIC(15, 2) NOT NULL,
            due_date DATE NOT NULL,
            paid BOOLEAN NOT NULL DEFAULT FALSE,
            paid_at TIMESTAMP,
            PRIMARY KEY (loan_id, number)
        )
        """,
    ]

    def __init__(self, config: PostgresConfig | str) -> None:
        """Initialize PostgreSQL storage.

        Parameters
        ----------
        config : PostgresConfig | str
            Connection configuration or connection string.
        """
        import psycopg

        self._psycopg = psycopg
        conninfo = config.connection_string if isinstance(config, PostgresConfig) else config
        self.conn = psycopg.connect(conninfo)

    def ensure_schema(self) -> None:
        """Create the tables if they do not exist."""
        with self.conn.cursor() as cur:
            for statement in self.SCHEMA:
                cur.execute(statement)
        self.conn.commit()
        logger.info("PostgreSQL schema ready")

    def load_customers(self) -> list[Customer]:
        return [customer_from_dict(row) for row in self._select("customers", "created_at, customer_id")]

    def load_loans(self) -> list[Loan]:
        rows = self._select("loans", "created_at, loan_id")
        schedule: dict[str, list[dict]] = {}
        for inst in self._select("installments", "loan_id, number"):
            schedule.setdefault(inst["loan_id"], []).append(inst)

        for row in rows:
            row["installments"] = schedule.get(row["loan_id"], [])
        return [loan_from_dict(row) for row in rows]

    def save_customers(self, customers: list[Customer]) -> None:
        self._upsert("customers", [self._customer_row(c) for c in customers])
        self.conn.commit()

    def save_loans(self, loans: list[Loan]) -> None:
        self._upsert("loans", [self._loan_row(loan) for loan in loans])
        self._upsert(
            "installments",
            [
                (loan.loan_id, inst.number, inst.amount, inst.due_date, inst.paid, inst.paid_at)
                for loan in loans
                for inst in loan.installments
            ],
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def _select(self, table: str, order_by: str) -> list[dict[str, Any]]:
        columns = self.TABLE_COLUMNS[table]
        query = f"SELECT {', '.join(columns)} FROM {table} ORDER BY {order_by}"  # noqa: S608
        try:
            with self.conn.cursor() as cur:
                cur.execute(query)
                rows = cur.fetchall()
        except self._psycopg.Error as e:
            raise StorageError(f"Could not load {table}: {e}") from e
        return [dict(zip(columns, row)) for row in rows]

    def _upsert(self, table: str, rows: list[tuple]) -> None:
        if not rows:
            return

        columns = self.TABLE_COLUMNS[table]
        keys = self.PRIMARY_KEYS[table]
        updates = ", ".join(f"{col} = EXCLUDED.{col}" for col in columns if col not in keys)
        query = (
            f"INSERT INTO {table} ({', '.join(columns)}) "  # noqa: S608
            f"VALUES ({', '.join(['%s'] * len(columns))}) "
            f"ON CONFLICT ({', '.join(keys)}) DO UPDATE SET {updates}"
        )
        try:
            with self.conn.cursor() as cur:
                cur.executemany(query, rows)
        except self._psycopg.Error as e:
            self.conn.rollback()
            raise StorageError(f"Could not save {table}: {e}") from e
        logger.debug("Upserted %d rows into %s", len(rows), table)

    @staticmethod
    def _customer_row(c: Customer) -> tuple:
        return (
            c.customer_id, c.name, c.cpf, c.email, c.phone, c.tier.value, c.credit_limit,
            c.used_credit, c.monthly_income, c.address, c.status.value, c.created_at, c.updated_at,
        )

    @staticmethod
    def _loan_row(loan: Loan) -> tuple:
        return (
            loan.loan_id, loan.customer_id, loan.product_name, loan.principal,
            loan.total_with_interest, loan.interest_rate, loan.installments_count,
            loan.created_at, loan.status.value, loan.updated_at,
        )
