"""The signed payload POSTed to each hook."""

from __future__ import annotations

import time
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .hook import EventType


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class Envelope(BaseModel):
    """Event envelope delivered to a webhook endpoint.

    One envelope is built per hook per trigger. ``id`` and ``created`` are
    unique to the delivery, ``idempotency_key`` is shared by every hook
    notified by the same trigger call.

    Attributes:
        id: Unique identifier for this delivery.
        created: When the envelope was built, in epoch milliseconds.
        idempotency_key: Identifier of the trigger call that produced it.
        api_version: API version tag of the sending client.
        type: Event type.
        data: Opaque JSON-serializable payload. None is left off the wire.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: UUID = Field(default_factory=uuid4)
    created: int = Field(default_factory=now_ms, ge=0)
    idempotency_key: UUID
    api_version: str
    type: EventType
    data: Any = None

    @classmethod
    def build(
        cls,
        event_type: EventType,
        api_version: str,
        idempotency_key: UUID,
        data: Any = None,
    ) -> Envelope:
        """Create an envelope with a fresh id and timestamp."""
        return cls(
            idempotency_key=idempotency_key,
            api_version=api_version,
            type=event_type,
            data=data,
        )

    def to_body(self) -> bytes:
        """Serialize to the compact UTF-8 JSON body sent on the wire.

        Callers must sign and send the same bytes; serializing twice is
        not guaranteed to be byte-identical for arbitrary ``data``.
        """
        exclude = {"data"} if self.data is None else None
        return self.model_dump_json(exclude=exclude).encode("utf-8")


__all__ = ["Envelope", "now_ms"]
