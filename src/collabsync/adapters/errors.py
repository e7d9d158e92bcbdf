"""Translation of transport failures into domain errors."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from collabsync.domain.errors import RemoteRejectedError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = getLogger(__name__)


def _error_payload(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text or None


async def checked(
    operation: str,
    send: Callable[[], Awaitable[httpx.Response]],
) -> httpx.Response:
    """Await ``send`` and raise ``RemoteRejectedError`` unless it returned 2xx."""

    try:
        response = await send()
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        payload = _error_payload(exc.response)
        log.error(f"{operation} rejected with HTTP {exc.response.status_code}: {payload}")
        raise RemoteRejectedError(
            f"{operation} rejected with HTTP {exc.response.status_code}",
            status_code=exc.response.status_code,
            payload=payload,
        ) from exc
    except httpx.HTTPError as exc:
        log.error(f"{operation} failed: {exc}")
        raise RemoteRejectedError(f"{operation} failed: {exc}") from exc
    return response
