"""Base domain event.

Events are immutable records of something that happened to a case or its
tasks. Services return them next to the updated aggregate so callers can log
them, notify users, or ignore them.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and the UTC time it was recorded.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
