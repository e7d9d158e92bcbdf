"""Invitable identities and the collaborations they are invited into."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, kw_only=True)
class InvitableIdentity:
    """Directory entry that can receive a membership request.

    ``display_name`` is computed locally and may be rewritten during
    disambiguation; it is never taken from the wire.
    """

    id: str
    preferred_email: str
    firstname: str | None = None
    lastname: str | None = None
    display_name: str = ""


@dataclass(slots=True, frozen=True, kw_only=True)
class Collaboration:
    id: str
    object_type: str
    creator: str | None = None
    managers: tuple[str, ...] = field(default_factory=tuple)
