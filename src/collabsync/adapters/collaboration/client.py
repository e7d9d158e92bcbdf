"""HTTP client for collaboration directory search and membership requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from collabsync.adapters.errors import checked
from collabsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from collabsync.config.api import ApiConfig, collaboration_resilience
from collabsync.domain.errors import RemoteRejectedError
from collabsync.domain.model import Collaboration, InvitableIdentity
from collabsync.domain.ports import CollaborationClient

from .schema import CollaborationPayload, UserPayload

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

log = getLogger(__name__)

_USER_LIST = TypeAdapter(list[UserPayload])


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def parse_identity(payload: UserPayload) -> InvitableIdentity:
    return InvitableIdentity(
        id=payload.id,
        preferred_email=payload.preferred_email,
        firstname=payload.firstname,
        lastname=payload.lastname,
    )


@dataclass(slots=True)
class HttpCollaborationClient:
    config: ApiConfig = field(default_factory=ApiConfig.from_environment)
    resilience: ResilienceConfig | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _http: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> HttpCollaborationClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def http(self) -> ResilientClient:
        if self._http is None:
            self._http = self.client_factory(
                self.resilience or collaboration_resilience(self.config)
            )
        return self._http

    async def search_invitable(
        self,
        scope_type: str,
        scope_id: str,
        *,
        search: str,
        limit: int,
    ) -> list[InvitableIdentity]:
        url = f"/collaborations/{scope_type}/{scope_id}/invitablepeople"
        params = {"search": search, "limit": str(limit)}
        response = await checked(
            "Search invitable people",
            lambda: self.http.get(url, params=params),
        )
        if not response.content:
            return []
        try:
            users = _USER_LIST.validate_json(response.content)
        except PydanticValidationError as exc:
            log.error(f"Unexpected invitable people payload: {exc}")
            raise RemoteRejectedError(
                "Search invitable people returned an unexpected payload",
                status_code=response.status_code,
            ) from exc
        return [parse_identity(user) for user in users]

    async def get_collaboration(self, object_type: str, collaboration_id: str) -> Collaboration:
        url = f"/collaborations/{object_type}/{collaboration_id}"
        response = await checked("Get collaboration", lambda: self.http.get(url))
        try:
            payload = CollaborationPayload.model_validate_json(response.content)
        except PydanticValidationError as exc:
            log.error(f"Unexpected collaboration payload: {exc}")
            raise RemoteRejectedError(
                "Get collaboration returned an unexpected payload",
                status_code=response.status_code,
            ) from exc
        return Collaboration(
            id=payload.id,
            object_type=payload.object_type or object_type,
            creator=payload.creator,
            managers=tuple(payload.managers),
        )

    async def request_membership(self, scope_type: str, scope_id: str, user_id: str) -> None:
        url = f"/collaborations/{scope_type}/{scope_id}/membership/{user_id}"
        await checked("Request membership", lambda: self.http.put(url))


class LoggingNotifier:
    """Notification surface rendered through the log."""

    def weak_info(self, title: str, text: str) -> None:
        log.info("%s: %s", title, text)


if TYPE_CHECKING:
    _client_check: CollaborationClient = HttpCollaborationClient()
