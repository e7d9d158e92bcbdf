"""Collaboration invitations: directory lookup and the run guard."""

from __future__ import annotations

from .directory import disambiguate, display_name_of, is_manager, search_invitable
from .guard import (
    GuardState,
    IdentityOutcome,
    InvitationReport,
    InvitationRunGuard,
    SubmitStatus,
)

__all__ = [
    "GuardState",
    "IdentityOutcome",
    "InvitationReport",
    "InvitationRunGuard",
    "SubmitStatus",
    "disambiguate",
    "display_name_of",
    "is_manager",
    "search_invitable",
]
