"""Per-hook outcome of a settled fan-out."""

from __future__ import annotations

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .envelope import Envelope


class DeliveryResult(BaseModel):
    """Outcome of delivering one envelope to one hook.

    Exactly one of ``response`` and ``error`` is set. A response with a
    non-2xx status still counts as delivered; inspect ``status_code``.

    Attributes:
        url: Hook URL the envelope was sent to.
        envelope: The envelope that was sent.
        response: Transport response, when one arrived.
        error: Exception raised by the transport or an observer.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    url: str
    envelope: Envelope
    response: httpx.Response | None = Field(default=None)
    error: BaseException | None = Field(default=None)

    @property
    def ok(self) -> bool:
        """Whether the delivery completed without raising."""
        return self.error is None

    @property
    def status_code(self) -> int | None:
        """HTTP status of the response, if any."""
        return self.response.status_code if self.response is not None else None


__all__ = ["DeliveryResult"]
