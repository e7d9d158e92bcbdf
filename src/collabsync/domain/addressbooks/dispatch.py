"""Batch dispatcher for address book reconciliation.

Every descriptor is classified, resolved and sent to its remote operation
independently. All items are in flight at once; the batch returns when every
item has settled. A failing item becomes a ``Failure`` outcome and never
cancels its siblings. Events are emitted per item, right after that item's
remote call succeeded, so their order follows completion rather than input.
A listener that raises is logged and does not turn the item into a failure.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from collabsync.domain.events import AddressbookEvent
from collabsync.domain.model import BatchOutcome, Failure, RemoteDescriptor, Success

from .classify import DelegatedShare, Owned, PublicLink, classify
from .payloads import accept_share_payload, create_payload, subscription_payload, update_payload
from .resolve import resolve_home

if TYPE_CHECKING:
    from collections.abc import Iterable

    from collabsync.domain.events import EventEmitter
    from collabsync.domain.ports import AddressbookClient

log = getLogger(__name__)


async def reconcile(
    descriptors: Iterable[object],
    current_user_id: str,
    *,
    client: AddressbookClient,
    events: EventEmitter,
) -> list[BatchOutcome]:
    """Return one outcome per descriptor, in input order."""

    items = list(descriptors)

    async def settle(descriptor: object) -> BatchOutcome:
        try:
            record, event = await dispatch_one(descriptor, current_user_id, client=client)
        except Exception as exc:  # noqa: BLE001
            log.warning("Address book reconciliation failed: %s", exc)
            return Failure(exc)
        try:
            events.emit(event, record)
        except Exception:
            log.exception("Listener for %s failed on %s", event, record.name)
        return Success(record)

    outcomes = list(await asyncio.gather(*(settle(item) for item in items)))
    failed = sum(1 for outcome in outcomes if not outcome.ok)
    log.info(
        "Reconciled %d address book(s): %d succeeded, %d failed",
        len(outcomes),
        len(outcomes) - failed,
        failed,
    )
    return outcomes


async def dispatch_one(
    descriptor: object,
    current_user_id: str,
    *,
    client: AddressbookClient,
) -> tuple[RemoteDescriptor, AddressbookEvent]:
    """Run the remote operation for one descriptor.

    Returns the local-facing record and the event that announces it.
    """

    variant = classify(descriptor)
    home = resolve_home(variant, current_user_id)
    resource = client.addressbook_home(home.collection_id).addressbook(home.resource_name)

    match variant:
        case PublicLink(descriptor=shell):
            created = await resource.create(subscription_payload(shell))
            return shell.merged(created, is_subscription=True), AddressbookEvent.CREATED
        case DelegatedShare(descriptor=shell):
            accepted = await resource.accept_share(accept_share_payload(shell))
            display_name = shell.source.name if shell.source else None
            record = shell.merged(accepted, name=display_name or shell.name, is_subscription=True)
            return record, AddressbookEvent.CREATED
        case Owned(descriptor=shell) if home.resource_name is None:
            created = await resource.create(create_payload(shell))
            return shell.merged(created), AddressbookEvent.CREATED
        case Owned(descriptor=shell):
            await resource.update(update_payload(shell))
            return shell, AddressbookEvent.UPDATED
        case _:
            assert_never(variant)
