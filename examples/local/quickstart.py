#!/usr/bin/env python3
"""Quickstart demo - fan out a signed event and verify it on the receiving side.

Demonstrates:
- WebhookClient: register hooks with and without event filters
- subscribe(): react to each completed delivery
- verify_signature(): what a receiver does with the raw body
- trigger_settled(): per-hook results when some deliveries fail

Runs offline: an httpx.MockTransport plays the part of the receivers.
"""

import asyncio

import httpx

from hookshot import Envelope, WebhookClient, configure_logging, generate_secret, verify_signature

SECRET = generate_secret()


def receiver(request: httpx.Request) -> httpx.Response:
    """A receiver checks the signature against the raw body before parsing it."""
    if request.url.host == "down.example.com":
        raise httpx.ConnectError("Connection refused", request=request)
    signature = request.headers["X-EatingDots-Signature"]
    if not verify_signature(SECRET, signature, request.content):
        return httpx.Response(401, request=request)
    return httpx.Response(204, request=request)


async def main() -> None:
    configure_logging(level="WARNING", format="text")

    print("=" * 60)
    print("Hookshot Quickstart Demo")
    print("=" * 60)

    async with httpx.AsyncClient(transport=httpx.MockTransport(receiver)) as http_client:
        client = WebhookClient(
            api_version="2020-08-27",
            secret=SECRET,
            hooks=[{"url": "https://user-hook.com", "events": ["did_something"]}],
            mode="production",
            name="EatingDots",
            http_client=http_client,
        )
        client.add("https://audit.example.com")
        client.add("https://another-user-hook.com", ["something_else"])

        @client.subscribe
        async def report(url: str, envelope: Envelope, response: httpx.Response) -> None:
            print(f"  {url} <- {envelope.type} ({envelope.id}) -> HTTP {response.status_code}")

        print("\n1. trigger('did_something')")
        responses = await client.trigger("did_something", {"name": "John Doe", "age": 42})
        print(f"   {len(responses)} deliveries")

        print("\n2. trigger('nobody_listens') on a filtered hook set")
        client_only_filtered = WebhookClient(
            api_version="2020-08-27",
            secret=SECRET,
            hooks=[{"url": "https://user-hook.com", "events": ["did_something"]}],
            http_client=http_client,
        )
        print(f"   {await client_only_filtered.trigger('nobody_listens')}")

        print("\n3. trigger_settled() with an unreachable hook")
        client.add("https://down.example.com")
        for result in await client.trigger_settled("something_else"):
            status = result.status_code if result.ok else f"failed: {result.error}"
            print(f"   {result.url}: {status}")


if __name__ == "__main__":
    asyncio.run(main())
