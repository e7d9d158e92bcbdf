"""Rate-limited, retrying and optionally caching HTTP client for the groupware API."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Request as HishelCacheRequest
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from collabsync.config.http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from collabsync.config.storage import get_http_cache_path

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes

__all__ = [
    "CacheConfig",
    "MutationSafeTransport",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
    "cache_database_path",
]


class RequestOptions(TypedDict, total=False):
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=sorted(policy.allowed_methods),
        status_forcelist=sorted(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


class MutationSafeTransport(httpx.AsyncBaseTransport):
    """Retries replay-safe methods only; any other request is sent exactly once."""

    def __init__(
        self, policy: RetryPolicy, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._methods = frozenset(method.upper() for method in policy.allowed_methods)
        self._direct = transport or httpx.AsyncHTTPTransport()
        self._retrying = RetryTransport(transport=self._direct, retry=build_retry(policy))

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.method.upper() in self._methods:
            return await self._retrying.handle_async_request(request)
        return await self._direct.handle_async_request(request)

    async def aclose(self) -> None:
        await self._direct.aclose()


class ResilientClient:
    """One per API and batch; every request of the batch shares its limiter and pool."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        options: dict[str, object] = {
            "timeout": config.timeout_seconds,
            "transport": MutationSafeTransport(config.retry),
        }
        if config.base_url is not None:
            options["base_url"] = config.base_url
        if config.default_headers:
            options["headers"] = dict(config.default_headers)

        if config.cache is None:
            self._client: httpx.AsyncClient = httpx.AsyncClient(**options)  # type: ignore[arg-type]
        else:
            storage, policy = _build_cache(config.cache)
            self._client = AsyncCacheClient(**options, storage=storage, policy=policy)  # type: ignore[arg-type]

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self, method: str, url: str, **kwargs: Unpack[RequestOptions]
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(method, url, **kwargs)
        async with self._limiter:
            return await self._client.request(method, url, **kwargs)

    async def get(self, url: str, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)


class _MethodFilter(BaseFilter[HishelCacheRequest]):
    """Lets hishel cache only requests made with one of ``methods``."""

    def __init__(self, methods: frozenset[str]) -> None:
        self._methods = frozenset(method.upper() for method in methods)

    def needs_body(self) -> bool:
        return False

    def apply(self, item: HishelCacheRequest, body: bytes | None) -> bool:  # noqa: ARG002
        return item.method.upper() in self._methods


def cache_database_path(config: CacheConfig) -> str:
    """Where hishel keeps responses; sqlite caches default to the data dir."""

    if config.backend == "sqlite":
        return config.sqlite_path or str(get_http_cache_path())
    if config.backend == "memory":
        return ":memory:"
    raise ValueError(f"Unsupported cache backend: {config.backend}")


def _build_cache(config: CacheConfig) -> tuple[AsyncSqliteStorage, FilterPolicy]:
    storage = AsyncSqliteStorage(
        database_path=cache_database_path(config),
        default_ttl=config.default_ttl_seconds,
    )
    policy = FilterPolicy(request_filters=[_MethodFilter(config.methods)])
    return storage, policy
