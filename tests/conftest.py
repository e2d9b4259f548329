"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

SECRET = "this-is-a-secret"
API_VERSION = "2020-08-27"


class RecordingHandler:
    """httpx.MockTransport handler that records every request it receives.

    Requests whose URL is in ``fail_urls`` raise ConnectError instead of
    returning a response.
    """

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        self.fail_urls: set[str] = set()
        self.events: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url).rstrip("/")
        self.requests.append(request)
        self.events.append(f"post:{url}")
        if url in self.fail_urls:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(self.status_code, json={"received": True}, request=request)

    def urls(self) -> list[str]:
        return [str(request.url).rstrip("/") for request in self.requests]


@pytest.fixture
def handler() -> RecordingHandler:
    """Create a recording transport handler."""
    return RecordingHandler()


@pytest_asyncio.fixture
async def http_client(handler: RecordingHandler) -> AsyncIterator[httpx.AsyncClient]:
    """Create an httpx client backed by the recording handler."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client
