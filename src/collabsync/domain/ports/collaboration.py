"""Ports for the collaboration directory and the notification surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from collabsync.domain.model import InvitableIdentity


@runtime_checkable
class CollaborationClient(Protocol):
    async def search_invitable(
        self,
        scope_type: str,
        scope_id: str,
        *,
        search: str,
        limit: int,
    ) -> Sequence[InvitableIdentity]: ...

    async def request_membership(self, scope_type: str, scope_id: str, user_id: str) -> None: ...


@runtime_checkable
class Notifier(Protocol):
    """Side channel for short human-readable notices."""

    def weak_info(self, title: str, text: str) -> None: ...
