"""Output sinks for engine events."""

from typing import Protocol

from store_credit.models import Event
from store_credit.sinks.console import ConsoleSink
from store_credit.sinks.kafka import KafkaSink


class EventSink(Protocol):
    """Anything that accepts committed engine events."""

    def publish(self, event: Event) -> None: ...

    def close(self) -> None: ...


__all__ = ["ConsoleSink", "EventSink", "KafkaSink"]
