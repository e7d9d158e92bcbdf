"""Domain port definitions for adapters."""

from __future__ import annotations

from .addressbooks import (
    AcceptSharePayload,
    AddressbookClient,
    AddressbookHome,
    AddressbookResource,
    CreatePayload,
    ListFilter,
    UpdatePayload,
)
from .collaboration import CollaborationClient, Notifier

__all__ = [
    "AcceptSharePayload",
    "AddressbookClient",
    "AddressbookHome",
    "AddressbookResource",
    "CollaborationClient",
    "CreatePayload",
    "ListFilter",
    "Notifier",
    "UpdatePayload",
]
