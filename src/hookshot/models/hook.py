"""Subscriber entries held by the hook registry."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Event names are free-form; callers pick their own vocabulary.
EventType = str

# Operating mode sent in the X-Environment header
Environment = Literal["sandbox", "production"]


class Hook(BaseModel):
    """A subscriber URL and the events it wants.

    Attributes:
        url: Endpoint that receives the POST. Not validated.
        events: Event types this hook receives. None means every event.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(description="Endpoint that receives webhook POSTs")
    events: list[EventType] | None = Field(
        default=None,
        description="Event types to receive (None for all)",
    )

    def wants(self, event_type: EventType) -> bool:
        """Check if this hook receives the given event type."""
        return self.events is None or event_type in self.events


__all__ = [
    "Environment",
    "EventType",
    "Hook",
]
