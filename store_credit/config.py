"""Configuration management for store-credit."""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from store_credit.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "json", "postgres")
EVENT_SINKS = ("none", "console", "kafka")


@dataclass
class EngineConfig:
    """Business rules applied by the lending engine."""

    enforce_credit_limit: bool = True
    installment_interval_days: int = 30
    income_limit_ratio: Decimal = Decimal("0.30")  # default limit for new customers
    event_source: str = "store-credit"


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "dev.store-credit"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "store_credit"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StorageConfig:
    """Persistence backend selection."""

    backend: str = "memory"
    json_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False

    def __post_init__(self) -> None:
        if self.backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend {self.backend!r}; expected one of {STORAGE_BACKENDS}"
            )


@dataclass
class StoreCreditConfig:
    """Main configuration for store-credit."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    event_sink: str = "none"
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        if self.event_sink not in EVENT_SINKS:
            raise ConfigurationError(
                f"Unknown event sink {self.event_sink!r}; expected one of {EVENT_SINKS}"
            )

    @classmethod
    def from_env(cls) -> "StoreCreditConfig":
        """Create config from environment variables."""
        import os

        try:
            engine = EngineConfig(
                enforce_credit_limit=os.getenv("STORE_CREDIT_ENFORCE_LIMIT", "true").lower() == "true",
                installment_interval_days=int(os.getenv("STORE_CREDIT_INTERVAL_DAYS", "30")),
                income_limit_ratio=Decimal(os.getenv("STORE_CREDIT_INCOME_LIMIT_RATIO", "0.30")),
            )

            storage = StorageConfig(
                backend=os.getenv("STORE_CREDIT_STORAGE", "memory"),
                json_dir=Path(os.getenv("STORE_CREDIT_DATA_DIR", "data")),
                pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
            )

            postgres = PostgresConfig(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=int(os.getenv("POSTGRES_PORT", "5432")),
                database=os.getenv("POSTGRES_DB", "store_credit"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            )

            kafka = KafkaConfig(
                bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
                acks=os.getenv("KAFKA_ACKS", "all"),
                topic_prefix=os.getenv("TOPIC_PREFIX", "dev.store-credit"),
            )
        except ArithmeticError as e:
            raise ConfigurationError(f"Invalid decimal setting: {e}") from e
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        return cls(
            engine=engine,
            storage=storage,
            postgres=postgres,
            kafka=kafka,
            event_sink=os.getenv("STORE_CREDIT_EVENT_SINK", "none"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
