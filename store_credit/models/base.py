"""Base models shared across entities."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for streaming."""

    event_id: str
    event_type: str  # entity.action (e.g., loan.created)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)

    @property
    def entity(self) -> str:
        """Entity part of the event type (``loan`` for ``loan.created``)."""
        return self.event_type.split(".", 1)[0]
