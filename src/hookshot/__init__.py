"""Hookshot: signed webhook fan-out.

Delivers a signed HTTP notification for a named event to every
subscriber interested in it, and lets observers react to each delivery.

Quick Start:
    from hookshot import WebhookClient, generate_secret

    client = WebhookClient(api_version="2020-08-27", secret=generate_secret())
    client.add("https://myhook.com", ["did_something"])

    responses = await client.trigger("did_something", {"name": "John Doe", "age": 42})

Receivers check the X-Signature (or X-<Name>-Signature) header against
the raw request body:

    from hookshot import verify_signature

    verify_signature(secret, request.headers["X-Signature"], raw_body)
"""

__version__ = "0.1.0"

# Client
from .client import Observer, WebhookClient

# Configuration
from .config import ClientConfig, Settings

# Exceptions
from .exceptions import ConfigurationError, HookshotError

# Logging
from .logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)

# Models
from .models import DeliveryResult, Envelope, Environment, EventType, Hook
from .registry import HookRegistry

# Signing
from .signing import generate_secret, sign, verify_signature

__all__ = [
    # Version
    "__version__",
    # Client
    "WebhookClient",
    "HookRegistry",
    "Observer",
    # Configuration
    "ClientConfig",
    "Settings",
    # Exceptions
    "HookshotError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "bound_context",
    "clear_context",
    "unbind_context",
    # Models
    "DeliveryResult",
    "Envelope",
    "Environment",
    "EventType",
    "Hook",
    # Signing
    "sign",
    "verify_signature",
    "generate_secret",
]
