"""Port for the remote address book API (consumed, not implemented here)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypedDict, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from collabsync.domain.model import RemoteDescriptor


class ListFilter(TypedDict, total=False):
    personal: bool
    subscribed: bool
    shared: bool
    public: bool
    inviteStatus: int


class SourceLinkSelf(TypedDict):
    href: str


class SourceLink(TypedDict):
    self: SourceLinkSelf


CreatePayload = TypedDict(
    "CreatePayload",
    {
        "name": str,
        "description": str,
        "type": str,
        "source-link": SourceLink,
    },
    total=False,
)


class UpdatePayload(TypedDict, total=False):
    name: str
    description: str


class AcceptSharePayload(TypedDict):
    displayname: str | None


@runtime_checkable
class AddressbookResource(Protocol):
    """Operations scoped to one resolved ``(collection_id, resource_name)`` pair."""

    async def list(self, filters: ListFilter) -> Sequence[RemoteDescriptor]: ...

    async def get(self) -> RemoteDescriptor: ...

    async def create(self, payload: CreatePayload) -> RemoteDescriptor | None: ...

    async def update(self, payload: UpdatePayload) -> None: ...

    async def remove(self) -> None: ...

    async def accept_share(self, payload: AcceptSharePayload) -> RemoteDescriptor | None: ...

    async def share(self, sharees: Sequence[str]) -> None: ...


@runtime_checkable
class AddressbookHome(Protocol):
    def addressbook(self, resource_name: str | None = None) -> AddressbookResource: ...


@runtime_checkable
class AddressbookClient(Protocol):
    def addressbook_home(self, collection_id: str) -> AddressbookHome: ...
