"""Data models for Hookshot.

Exports:
    - Hook: A subscriber URL with an optional event filter
    - Envelope: The signed JSON payload sent to each hook
    - DeliveryResult: Per-hook outcome of a settled fan-out
    - EventType, Environment: Shared type aliases
"""

from .delivery import DeliveryResult
from .envelope import Envelope, now_ms
from .hook import Environment, EventType, Hook

__all__ = [
    "DeliveryResult",
    "Envelope",
    "Environment",
    "EventType",
    "Hook",
    "now_ms",
]
