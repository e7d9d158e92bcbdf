"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from collabsync.adapters.collaboration import HttpCollaborationClient, LoggingNotifier
from collabsync.adapters.contacts import HttpAddressbookClient, parse_shell
from collabsync.config import ApiConfig
from collabsync.domain.addressbooks import AddressbookService
from collabsync.domain.errors import NotManagerError
from collabsync.domain.events import AddressbookEvent, EventBus, ListenerScope
from collabsync.domain.invitations import InvitationRunGuard, is_manager

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from collabsync.domain.invitations import InvitationReport
    from collabsync.domain.model import BatchOutcome, RemoteDescriptor

AddressbookClientFactory = Callable[[ApiConfig], HttpAddressbookClient]
CollaborationClientFactory = Callable[[ApiConfig], HttpCollaborationClient]


log = getLogger(__name__)


def _default_addressbook_client(config: ApiConfig) -> HttpAddressbookClient:
    return HttpAddressbookClient(config=config)


def _default_collaboration_client(config: ApiConfig) -> HttpCollaborationClient:
    return HttpCollaborationClient(config=config)


def _log_record(action: str) -> Callable[[object], None]:
    def listener(record: object) -> None:
        log.info("Address book %s: %s", action, getattr(record, "name", record))

    return listener


def _announce(bus: EventBus) -> ListenerScope:
    scope = ListenerScope(bus)
    for event in AddressbookEvent:
        scope.subscribe(event, _log_record(event.value))
    return scope


def to_descriptor(shell: object) -> object:
    """Parse a JSON shell; anything unparsable is handed on as-is and fails per item."""

    if not isinstance(shell, Mapping):
        return shell
    try:
        return parse_shell(shell)
    except PydanticValidationError:
        log.warning("Ignoring malformed address book shell: %s", shell)
        return shell


def list_addressbooks(
    *,
    config: ApiConfig | None = None,
    client_factory: AddressbookClientFactory | None = None,
) -> Sequence[RemoteDescriptor]:
    effective_config = config or ApiConfig.from_environment()
    factory = client_factory or _default_addressbook_client

    async def run() -> Sequence[RemoteDescriptor]:
        async with factory(effective_config) as client:
            service = AddressbookService(
                client=client, events=EventBus(), current_user_id=effective_config.user_id
            )
            return await service.list_addressbooks()

    return asyncio.run(run())


def subscribe_addressbooks(
    shells: Iterable[object] | None = None,
    *,
    from_home: str | None = None,
    config: ApiConfig | None = None,
    client_factory: AddressbookClientFactory | None = None,
    events: EventBus | None = None,
) -> list[BatchOutcome]:
    """Reconcile address book shells, or every public book of ``from_home``."""

    effective_config = config or ApiConfig.from_environment()
    factory = client_factory or _default_addressbook_client
    bus = events or EventBus()
    descriptors: list[object] = [to_descriptor(shell) for shell in shells or ()]

    async def run() -> list[BatchOutcome]:
        async with factory(effective_config) as client:
            service = AddressbookService(
                client=client, events=bus, current_user_id=effective_config.user_id
            )
            if from_home is not None:
                public = await service.list_subscribable_addressbooks(from_home)
                descriptors.extend(book.as_public_subscription() for book in public)
            log.info("Starting address book sync: %d shell(s)", len(descriptors))
            with _announce(bus):
                return await service.subscribe_addressbooks(descriptors)

    return asyncio.run(run())


def share_addressbook(
    book_name: str,
    sharees: Sequence[str],
    *,
    config: ApiConfig | None = None,
    client_factory: AddressbookClientFactory | None = None,
) -> RemoteDescriptor:
    effective_config = config or ApiConfig.from_environment()
    factory = client_factory or _default_addressbook_client

    async def run() -> RemoteDescriptor:
        async with factory(effective_config) as client:
            service = AddressbookService(
                client=client, events=EventBus(), current_user_id=effective_config.user_id
            )
            addressbook = await service.get_addressbook_by_book_name(book_name)
            await service.share_addressbook(addressbook, sharees)
            return addressbook

    return asyncio.run(run())


def invite_users(
    object_type: str,
    collaboration_id: str,
    terms: Sequence[str],
    *,
    config: ApiConfig | None = None,
    client_factory: CollaborationClientFactory | None = None,
    events: EventBus | None = None,
) -> InvitationReport:
    """Resolve each term through the directory and invite the first match.

    Terms without a match are left in the guard's free-text query, so they are
    reported as unresolved exactly like text typed but never picked.
    """

    effective_config = config or ApiConfig.from_environment()
    factory = client_factory or _default_collaboration_client
    bus = events or EventBus()

    async def run() -> InvitationReport:
        async with factory(effective_config) as client:
            collaboration = await client.get_collaboration(object_type, collaboration_id)
            if not is_manager(collaboration, effective_config.user_id):
                raise NotManagerError(
                    f"User {effective_config.user_id} does not manage {collaboration_id}"
                )
            guard = InvitationRunGuard(
                collaboration, client=client, events=bus, notifier=LoggingNotifier()
            )
            unresolved: list[str] = []
            for term in terms:
                found = await guard.find_invitable(term)
                if found:
                    guard.select(found[0])
                else:
                    unresolved.append(term)
            guard.query = ", ".join(unresolved)

            report = await guard.submit()
            if guard.invalid_user:
                log.warning("No user found for: %s", guard.invalid_user)
            if guard.error is not None:
                log.error("Invitation failed: %s", guard.error)
            return report

    return asyncio.run(run())
