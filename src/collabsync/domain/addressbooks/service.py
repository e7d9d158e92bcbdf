"""Address book operations for the current user."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from collabsync.domain.errors import (
    MissingAddressbookError,
    MissingNameError,
    UnclassifiableDescriptorError,
)
from collabsync.domain.events import AddressbookEvent
from collabsync.domain.model import InviteStatus

from .dispatch import reconcile
from .payloads import create_payload, update_payload
from .resolve import resolve_share_target

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from collabsync.domain.events import EventEmitter
    from collabsync.domain.model import BatchOutcome, RemoteDescriptor
    from collabsync.domain.ports import AddressbookClient, AddressbookResource

log = getLogger(__name__)


class AddressbookService:
    """Facade over the remote address book API.

    Successful mutations are announced on ``events`` once the remote call
    settled; failed calls propagate and announce nothing.
    """

    def __init__(
        self,
        *,
        client: AddressbookClient,
        events: EventEmitter,
        current_user_id: str,
    ) -> None:
        self._client = client
        self._events = events
        self.current_user_id = current_user_id

    def _own(self, book_name: str | None = None) -> AddressbookResource:
        return self._client.addressbook_home(self.current_user_id).addressbook(book_name)

    async def list_addressbooks(self) -> Sequence[RemoteDescriptor]:
        return await self._own().list(
            {
                "personal": True,
                "subscribed": True,
                "shared": True,
                "inviteStatus": InviteStatus.ACCEPTED.value,
            }
        )

    async def get_addressbook_by_book_name(self, book_name: str) -> RemoteDescriptor:
        return await self._own(book_name).get()

    async def list_subscribable_addressbooks(self, book_id: str) -> Sequence[RemoteDescriptor]:
        return await self._client.addressbook_home(book_id).addressbook().list({"public": True})

    async def list_subscribed_addressbooks(self) -> Sequence[RemoteDescriptor]:
        return await self._own().list({"subscribed": True})

    async def create_addressbook(self, addressbook: RemoteDescriptor | None) -> RemoteDescriptor:
        if addressbook is None:
            raise MissingAddressbookError
        if not addressbook.name:
            raise MissingNameError

        created = await self._own().create(create_payload(addressbook))
        record = created or addressbook
        self._events.emit(AddressbookEvent.CREATED, record)
        log.info("Created address book %r", record.name)
        return record

    async def update_addressbook(self, addressbook: RemoteDescriptor) -> RemoteDescriptor:
        await self._own(_require_book_name(addressbook)).update(update_payload(addressbook))
        self._events.emit(AddressbookEvent.UPDATED, addressbook)
        return addressbook

    async def remove_addressbook(self, addressbook: RemoteDescriptor) -> None:
        await self._own(_require_book_name(addressbook)).remove()
        self._events.emit(AddressbookEvent.DELETED, addressbook)
        log.info("Removed address book %s", addressbook.book_name)

    async def subscribe_addressbooks(self, shells: Iterable[object]) -> list[BatchOutcome]:
        return await reconcile(
            shells,
            self.current_user_id,
            client=self._client,
            events=self._events,
        )

    async def share_addressbook(
        self,
        addressbook: RemoteDescriptor,
        sharees: Sequence[str],
    ) -> None:
        target = resolve_share_target(addressbook)
        await (
            self._client.addressbook_home(target.collection_id)
            .addressbook(target.resource_name)
            .share(list(sharees))
        )
        log.info(
            "Shared %s/%s with %d sharee(s)",
            target.collection_id,
            target.resource_name,
            len(sharees),
        )


def _require_book_name(addressbook: RemoteDescriptor | None) -> str:
    if addressbook is None:
        raise MissingAddressbookError
    if not addressbook.book_name:
        raise UnclassifiableDescriptorError(
            "Address book has no book name to operate on", descriptor=addressbook
        )
    return addressbook.book_name
