"""Webhook fan-out with HMAC signatures.

A WebhookClient owns a hook registry, a shared secret and a list of
completion observers. Each ``trigger`` call builds one envelope per
matching hook, signs the serialized body, POSTs every envelope
concurrently and calls the observers once each response arrives.

Example:
    ```python
    from hookshot import WebhookClient

    client = WebhookClient(
        api_version="2020-08-27",
        secret="this-is-a-secret",
        hooks=[{"url": "https://user-hook.com", "events": ["did_something"]}],
        mode="production",
        name="EatingDots",
    )
    client.add("https://another-hook.com", ["something_else"])

    @client.subscribe
    async def record(url, envelope, response):
        print(url, envelope.id, response.status_code)

    responses = await client.trigger("did_something", {"name": "John Doe", "age": 42})
    ```
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Mapping
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

import httpx

from hookshot.config import ClientConfig, Settings
from hookshot.logging import bound_context, configure_logging, get_logger
from hookshot.models import DeliveryResult, Envelope, Environment, EventType, Hook
from hookshot.registry import HookRegistry
from hookshot.signing import sign

logger = get_logger(__name__)

Observer = Callable[[str, Envelope, httpx.Response], Awaitable[None] | None]


class WebhookClient:
    """Delivers signed event notifications to registered hooks.

    Instances share nothing: each has its own registry, secret and
    observers, so one client per tenant or configuration is the
    expected use.

    Args:
        api_version: Version tag copied into every envelope.
        secret: Shared secret for HMAC-SHA256 signatures.
        hooks: Initial hooks, as Hook instances or ``{"url", "events"}`` mappings.
        mode: "sandbox" or "production", sent as X-Environment.
        name: Instance name. When set the signature header is X-<name>-Signature.
        timeout_seconds: Per-request deadline. None (default) waits forever.
        http_client: Shared httpx.AsyncClient. When omitted one is opened per
            trigger. An injected client is never closed by this class.
        isolate_observers: Log observer exceptions instead of failing the
            delivery they belong to.

    Raises:
        ConfigurationError: If any option is missing or invalid.
    """

    def __init__(
        self,
        api_version: str,
        secret: str,
        hooks: Iterable[Hook | Mapping[str, Any]] | None = None,
        mode: Environment = "sandbox",
        name: str | None = None,
        *,
        timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        isolate_observers: bool = False,
    ) -> None:
        self._config = ClientConfig.parse(
            stacklevel=3,
            api_version=api_version,
            secret=secret,
            hooks=list(hooks) if hooks is not None else [],
            mode=mode,
            name=name,
            timeout_seconds=timeout_seconds,
        )
        self._registry = HookRegistry(self._config.hooks)
        self._observers: list[Observer] = []
        self._http_client = http_client
        self._isolate_observers = isolate_observers

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        hooks: Iterable[Hook | Mapping[str, Any]] | None = None,
        **overrides: Any,
    ) -> WebhookClient:
        """Create a client from environment-driven settings.

        Also configures logging from the settings' log level and format.

        Args:
            settings: Settings to use. Loaded from HOOKSHOT_* variables if None.
            hooks: Initial hooks.
            **overrides: Constructor arguments that take precedence over settings.

        Returns:
            A configured WebhookClient.
        """
        settings = settings or Settings()
        configure_logging(level=settings.log_level, format=settings.log_format)
        options = settings.client_options()
        options.update(overrides)
        return cls(hooks=hooks, **options)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def hooks(self) -> tuple[Hook, ...]:
        """Registered hooks, in registration order."""
        return self._registry.snapshot()

    def add(self, url: str, events: Iterable[EventType] | None = None) -> Hook:
        """Register another hook.

        Args:
            url: Endpoint to POST to.
            events: Event types that trigger this hook. None means all.

        Returns:
            The registered hook.
        """
        return self._registry.add(url, events)

    def subscribe(self, observer: Observer) -> Observer:
        """Register a completion observer.

        Observers are called as ``observer(url, envelope, response)`` after
        every delivery that received a response. Coroutine results are
        awaited. Returns the observer so this can be used as a decorator.
        """
        self._observers.append(observer)
        return observer

    on_done = subscribe

    async def trigger(self, event_type: EventType, data: Any = None) -> list[httpx.Response]:
        """Send an event to every hook that wants it.

        All matching hooks are contacted concurrently. The call returns once
        every delivery has settled; if any failed, the first failure in
        registration order is raised.

        Args:
            event_type: Event name to trigger.
            data: JSON-serializable payload. None leaves ``data`` off the body.

        Returns:
            One response per matched hook, in registration order. Empty if no
            hook matched.

        Raises:
            httpx.HTTPError: If a transport call failed.
        """
        results = await self.trigger_settled(event_type, data)
        for result in results:
            if result.error is not None:
                raise result.error
        return [result.response for result in results if result.response is not None]

    async def trigger_settled(
        self, event_type: EventType, data: Any = None
    ) -> list[DeliveryResult]:
        """Send an event and report the outcome of each delivery.

        Like ``trigger`` but never raises for individual deliveries.

        Returns:
            One DeliveryResult per matched hook, in registration order.
        """
        hooks = self._registry.match(event_type)
        if not hooks:
            logger.debug("No hooks subscribed to event", event_type=event_type)
            return []

        idempotency_key = uuid4()
        observers = tuple(self._observers)
        envelopes = [
            Envelope.build(event_type, self._config.api_version, idempotency_key, data)
            for _ in hooks
        ]

        with bound_context(event_type=event_type, idempotency_key=str(idempotency_key)):
            async with self._open_client() as client:
                outcomes = await asyncio.gather(
                    *(
                        self._deliver(client, hook.url, envelope, observers)
                        for hook, envelope in zip(hooks, envelopes, strict=True)
                    ),
                    return_exceptions=True,
                )

            results: list[DeliveryResult] = []
            for hook, envelope, outcome in zip(hooks, envelopes, outcomes, strict=True):
                if isinstance(outcome, BaseException):
                    results.append(DeliveryResult(url=hook.url, envelope=envelope, error=outcome))
                else:
                    results.append(
                        DeliveryResult(url=hook.url, envelope=envelope, response=outcome)
                    )

            logger.info(
                "Webhook fan-out settled",
                hooks=len(results),
                failed=sum(1 for result in results if not result.ok),
            )
        return results

    @asynccontextmanager
    async def _open_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
            yield client

    async def _deliver(
        self,
        client: httpx.AsyncClient,
        url: str,
        envelope: Envelope,
        observers: tuple[Observer, ...],
    ) -> httpx.Response:
        """Sign and POST one envelope, then notify observers."""
        # Signed bytes and sent bytes must be the same object
        body = envelope.to_body()
        headers = {
            "Content-Type": "application/json",
            "X-Environment": self._config.mode,
            self._config.signature_header: sign(self._config.secret, body),
        }

        try:
            response = await client.post(url, content=body, headers=headers)
        except Exception as e:
            logger.error(
                "Webhook delivery failed",
                url=url,
                envelope_id=str(envelope.id),
                error=str(e),
            )
            raise

        if response.is_success:
            logger.info("Webhook delivered", url=url, status_code=response.status_code)
        else:
            logger.warning("Webhook rejected", url=url, status_code=response.status_code)

        await self._notify(observers, url, envelope, response)
        return response

    async def _notify(
        self,
        observers: tuple[Observer, ...],
        url: str,
        envelope: Envelope,
        response: httpx.Response,
    ) -> None:
        for observer in observers:
            try:
                result = observer(url, envelope, response)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                if not self._isolate_observers:
                    raise
                logger.exception(
                    "Webhook observer failed",
                    url=url,
                    observer=getattr(observer, "__qualname__", repr(observer)),
                )

    def __repr__(self) -> str:
        return (
            f"WebhookClient(api_version={self._config.api_version!r}, "
            f"mode={self._config.mode!r}, name={self._config.name!r}, hooks={len(self._registry)})"
        )


__all__ = ["Observer", "WebhookClient"]
