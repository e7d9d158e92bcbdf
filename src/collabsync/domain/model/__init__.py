"""Pure domain types for address book reconciliation and invitations."""

from __future__ import annotations

from .descriptors import RemoteDescriptor, SourceRef
from .enums import InviteStatus, OutcomeStatus, SubscriptionType
from .identity import Collaboration, InvitableIdentity
from .outcome import BatchOutcome, Failure, Outcome, Success

__all__ = [
    "BatchOutcome",
    "Collaboration",
    "Failure",
    "InvitableIdentity",
    "InviteStatus",
    "Outcome",
    "OutcomeStatus",
    "RemoteDescriptor",
    "SourceRef",
    "SubscriptionType",
    "Success",
]
