"""HTTP client for the contacts (address book) API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from collabsync.adapters.errors import checked
from collabsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from collabsync.config.api import ApiConfig, contacts_resilience
from collabsync.domain.errors import RemoteRejectedError
from collabsync.domain.ports import AddressbookClient, AddressbookHome, AddressbookResource

from .schema import AddressbookListResponse, AddressbookPayload
from .translator import create_body, parse_addressbook, update_body

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    import httpx

    from collabsync.domain.model import RemoteDescriptor
    from collabsync.domain.ports import (
        AcceptSharePayload,
        CreatePayload,
        ListFilter,
        UpdatePayload,
    )

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _query_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse[ModelT: BaseModel](
    model: type[ModelT], response: httpx.Response, operation: str
) -> ModelT:
    try:
        return model.model_validate(response.json())
    except (ValueError, PydanticValidationError) as exc:
        log.error(f"{operation} returned an unexpected payload: {exc}")
        raise RemoteRejectedError(
            f"{operation} returned an unexpected payload",
            status_code=response.status_code,
        ) from exc


@dataclass(slots=True)
class HttpAddressbookClient:
    """Entry point of the contacts API: ``addressbook_home(id).addressbook(name)``.

    Use as an async context manager so every operation of a batch shares one
    rate limiter and connection pool.
    """

    config: ApiConfig = field(default_factory=ApiConfig.from_environment)
    resilience: ResilienceConfig | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _http: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> HttpAddressbookClient:
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
            self._http = self.client_factory(self.resilience or contacts_resilience(self.config))
        return self._http

    def addressbook_home(self, collection_id: str) -> HttpAddressbookHome:
        return HttpAddressbookHome(self, collection_id)


@dataclass(slots=True, frozen=True)
class HttpAddressbookHome:
    owner: HttpAddressbookClient
    collection_id: str

    def addressbook(self, resource_name: str | None = None) -> HttpAddressbook:
        return HttpAddressbook(self.owner, self.collection_id, resource_name)


@dataclass(slots=True, frozen=True)
class HttpAddressbook:
    owner: HttpAddressbookClient
    collection_id: str
    resource_name: str | None = None

    @property
    def home_url(self) -> str:
        return f"/addressbooks/{self.collection_id}.json"

    @property
    def book_url(self) -> str:
        if not self.resource_name:
            raise ValueError(f"Address book in {self.collection_id} has no resource name")
        return f"/addressbooks/{self.collection_id}/{self.resource_name}.json"

    async def list(self, filters: ListFilter) -> Sequence[RemoteDescriptor]:
        params = {key: _query_value(value) for key, value in filters.items()}
        response = await checked(
            "List address books",
            lambda: self.owner.http.get(self.home_url, params=params),
        )
        listing = _parse(AddressbookListResponse, response, "List address books")
        return [parse_addressbook(item) for item in listing.embedded.addressbooks]

    async def get(self) -> RemoteDescriptor:
        url = self.book_url
        response = await checked("Get address book", lambda: self.owner.http.get(url))
        return parse_addressbook(_parse(AddressbookPayload, response, "Get address book"))

    async def create(self, payload: CreatePayload) -> RemoteDescriptor | None:
        body = create_body(payload)
        response = await checked(
            "Create address book",
            lambda: self.owner.http.post(self.home_url, json=body),
        )
        if not response.content:
            return None
        return parse_addressbook(_parse(AddressbookPayload, response, "Create address book"))

    async def update(self, payload: UpdatePayload) -> None:
        url = self.book_url
        body = update_body(payload)
        await checked(
            "Update address book",
            lambda: self.owner.http.request("PROPPATCH", url, json=body),
        )

    async def remove(self) -> None:
        url = self.book_url
        await checked("Remove address book", lambda: self.owner.http.delete(url))

    async def accept_share(self, payload: AcceptSharePayload) -> RemoteDescriptor | None:
        url = self.book_url
        body = {
            "dav:invite-reply": {
                "dav:invite-accepted": True,
                "displayname": payload["displayname"],
            }
        }
        response = await checked(
            "Accept address book share",
            lambda: self.owner.http.post(url, json=body),
        )
        if not response.content:
            return None
        return parse_addressbook(
            _parse(AddressbookPayload, response, "Accept address book share")
        )

    async def share(self, sharees: Sequence[str]) -> None:
        url = self.book_url
        body = {"dav:share-resource": {"dav:sharee": list(sharees)}}
        await checked("Share address book", lambda: self.owner.http.post(url, json=body))


if TYPE_CHECKING:
    _client_check: AddressbookClient = HttpAddressbookClient()
    _home_check: AddressbookHome = HttpAddressbookHome(HttpAddressbookClient(), "")
    _resource_check: AddressbookResource = HttpAddressbook(HttpAddressbookClient(), "")
