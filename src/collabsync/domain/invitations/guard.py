"""Invitation run guard.

Owns the selection of identities and the running state of one invitation
surface. At most one submission is in flight per guard; a submit issued while
another is running is dropped without any remote call.

States::

    IDLE --submit--> VALIDATING --invalid--> IDLE
                         |
                         +--valid--> SUBMITTING --all settled--> IDLE
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from collabsync.domain.events import CollaborationEvent
from collabsync.domain.model import Failure, Success

from .directory import DEFAULT_SEARCH_LIMIT, search_invitable

if TYPE_CHECKING:
    from collabsync.domain.events import EventEmitter
    from collabsync.domain.model import Collaboration, InvitableIdentity, Outcome
    from collabsync.domain.ports import CollaborationClient, Notifier

log = getLogger(__name__)

SUCCESS_TITLE = "Invitations have been sent"
SUCCESS_TEXT = "You will be notified when new users join the collaboration."


class GuardState(StrEnum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class SubmitStatus(StrEnum):
    NO_SELECTION = "no_selection"
    UNRESOLVED_QUERY = "unresolved_query"
    DROPPED = "dropped"
    COMPLETED = "completed"


@dataclass(slots=True, frozen=True)
class IdentityOutcome:
    identity: InvitableIdentity
    outcome: Outcome[None]


@dataclass(slots=True, frozen=True)
class InvitationReport:
    status: SubmitStatus
    outcomes: tuple[IdentityOutcome, ...] = field(default_factory=tuple)

    @property
    def invited(self) -> list[InvitableIdentity]:
        return [item.identity for item in self.outcomes if item.outcome.ok]

    @property
    def failed(self) -> list[InvitableIdentity]:
        return [item.identity for item in self.outcomes if not item.outcome.ok]

    @property
    def all_succeeded(self) -> bool:
        return self.status is SubmitStatus.COMPLETED and not self.failed


class InvitationRunGuard:
    def __init__(
        self,
        collaboration: Collaboration,
        *,
        client: CollaborationClient,
        events: EventEmitter,
        notifier: Notifier,
    ) -> None:
        self.collaboration = collaboration
        self._client = client
        self._events = events
        self._notifier = notifier

        self.state = GuardState.IDLE
        self.query = ""
        self.selection: list[InvitableIdentity] = []
        self.no_user = False
        self.invalid_user: str | None = None
        self.error: object = None
        self.error_visible = False

    @property
    def running(self) -> bool:
        return self.state is GuardState.SUBMITTING

    async def find_invitable(
        self, query: str, *, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[InvitableIdentity]:
        """Search candidates; any hit means the typed query has been resolved."""

        self.query = query
        found = await search_invitable(
            self._client,
            self.collaboration.object_type,
            self.collaboration.id,
            query,
            limit=limit,
        )
        if found:
            self.query = ""
        return found

    def select(self, identity: InvitableIdentity) -> None:
        if all(selected.id != identity.id for selected in self.selection):
            self.selection.append(identity)

    def deselect(self, identity: InvitableIdentity) -> None:
        self.selection = [selected for selected in self.selection if selected.id != identity.id]

    async def submit(self) -> InvitationReport:
        busy = self.running
        if not busy:
            self.state = GuardState.VALIDATING

        self.error_visible = False
        self.no_user = False
        self.invalid_user = None

        if self.query:
            self.invalid_user = self.query
            self.error_visible = True
            if not self.selection:
                self.query = ""
                return self._abort(busy, SubmitStatus.UNRESOLVED_QUERY)
        elif not self.selection:
            self.no_user = True
            self.error_visible = True
            return self._abort(busy, SubmitStatus.NO_SELECTION)

        if busy:
            log.debug("Invitation already running for %s, dropping submit", self.collaboration.id)
            return InvitationReport(SubmitStatus.DROPPED)

        self.state = GuardState.SUBMITTING
        self.error_visible = False
        self.error = None
        identities = list(self.selection)
        try:
            outcomes = await asyncio.gather(*(self._invite(identity) for identity in identities))
        finally:
            self.selection = []
            self.state = GuardState.IDLE

        report = InvitationReport(
            SubmitStatus.COMPLETED,
            tuple(
                IdentityOutcome(identity, outcome)
                for identity, outcome in zip(identities, outcomes, strict=True)
            ),
        )
        first_failure = next(
            (outcome for outcome in outcomes if isinstance(outcome, Failure)), None
        )
        if first_failure is None:
            self._notifier.weak_info(SUCCESS_TITLE, SUCCESS_TEXT)
            if self.query:
                self.invalid_user = self.query
                self.error_visible = True
            self._events.emit(CollaborationEvent.INVITE_USERS)
            log.info("Invited %d user(s) into %s", len(identities), self.collaboration.id)
        else:
            self.error = getattr(first_failure.error, "payload", None) or str(first_failure.error)
            self.error_visible = True
            log.warning(
                "%d of %d invitation(s) into %s failed",
                len(report.failed),
                len(identities),
                self.collaboration.id,
            )
        return report

    def _abort(self, busy: bool, status: SubmitStatus) -> InvitationReport:
        if not busy:
            self.state = GuardState.IDLE
        return InvitationReport(status)

    async def _invite(self, identity: InvitableIdentity) -> Outcome[None]:
        try:
            await self._client.request_membership(
                self.collaboration.object_type, self.collaboration.id, identity.id
            )
        except Exception as exc:  # noqa: BLE001
            return Failure(exc)
        return Success(None)
