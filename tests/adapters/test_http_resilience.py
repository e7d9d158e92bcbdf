from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx

from collabsync.adapters.http_resilience import (
    MutationSafeTransport,
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
)
from collabsync.adapters.http_resilience import _MethodFilter as MethodFilter  # noqa: PLC2701
from tests.helpers.http import RecordingTransport


def _flaky_transport(calls: list[str]) -> MutationSafeTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.method)
        return httpx.Response(503)

    return MutationSafeTransport(
        RetryPolicy(total=2, backoff_factor=0.0), transport=httpx.MockTransport(handler)
    )


def test_idempotent_requests_are_retried() -> None:
    calls: list[str] = []

    async def run() -> int:
        async with httpx.AsyncClient(transport=_flaky_transport(calls)) as client:
            response = await client.get("https://groupware.test/api/addressbooks/1.json")
        return response.status_code

    assert asyncio.run(run()) == 503
    assert len(calls) > 1


def test_mutations_are_sent_exactly_once() -> None:
    calls: list[str] = []

    async def run() -> None:
        async with httpx.AsyncClient(transport=_flaky_transport(calls)) as client:
            await client.post("https://groupware.test/api/addressbooks/1.json")
            await client.request("PROPPATCH", "https://groupware.test/api/addressbooks/1/a.json")

    asyncio.run(run())

    assert calls == ["POST", "PROPPATCH"]


def test_method_filter_only_admits_configured_methods() -> None:
    cache_filter = MethodFilter(frozenset({"get"}))

    assert cache_filter.apply(SimpleNamespace(method="GET"), None)  # type: ignore[arg-type]
    assert not cache_filter.apply(SimpleNamespace(method="PUT"), None)  # type: ignore[arg-type]
    assert not cache_filter.needs_body()


def test_rate_limited_client_still_sends_every_request() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(204))
    client = transport.factory(
        ResilienceConfig(
            name="limited",
            base_url="https://groupware.test/api",
            ratelimit=RateLimit(max_calls=2, per_seconds=0.05),
        )
    )

    async def run() -> list[int]:
        async with client:
            responses = await asyncio.gather(*(client.delete(f"/items/{n}") for n in range(4)))
        return [response.status_code for response in responses]

    assert asyncio.run(run()) == [204, 204, 204, 204]
    assert sorted(request.url.path for request in transport.requests) == [
        f"/api/items/{n}" for n in range(4)
    ]


def test_resilient_client_without_cache_uses_plain_async_client() -> None:
    client = ResilientClient(ResilienceConfig(name="plain"))

    assert type(client._client) is httpx.AsyncClient  # noqa: SLF001  # type: ignore[reportPrivateUsage]
