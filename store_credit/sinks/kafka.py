"""Kafka sink for streaming engine events to Kafka topics."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from store_credit.config import KafkaConfig
from store_credit.exceptions import SinkError
from store_credit.models import Event
from store_credit.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Publish engine events to ``<topic_prefix>.<entity>`` topics.

    Messages are keyed by customer id so every event for a customer lands on
    the same partition, in commit order.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def topic_for(self, event: Event) -> str:
        """Topic for an event (``dev.store-credit.loan`` for ``loan.created``)."""
        return f"{self.config.topic_prefix}.{event.entity}"

    def _key_for(self, event: Event) -> str:
        return event.data.get("customer_id") or event.subject

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def publish(self, event: Event) -> None:
        """Send a single event."""
        topic = self.topic_for(event)
        value = json.dumps(to_dict(event), ensure_ascii=False, default=str).encode("utf-8")
        key = self._key_for(event)

        try:
            self._produce(topic, key, value)
        except BufferError:
            # Local queue full: drain delivery reports and try once more
            logger.warning(
                "Producer queue full, flushing before retrying %s", event.event_id,
                extra={"event_type": event.event_type},
            )
            self.producer.flush(self.config.linger_ms / 1000 + 1)
            try:
                self._produce(topic, key, value)
            except (BufferError, KafkaException) as e:
                raise SinkError(f"Could not publish {event.event_type} {event.event_id}: {e}") from e
        except KafkaException as e:
            raise SinkError(f"Could not publish {event.event_type} {event.event_id}: {e}") from e

        self.stats.sent += 1
        self.producer.poll(0)

    def _produce(self, topic: str, key: str, value: bytes) -> None:
        self.producer.produce(
            topic=topic,
            key=key.encode("utf-8"),
            value=value,
            callback=self._delivery_callback,
        )

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
