"""Public interface for the collaboration adapter."""

from __future__ import annotations

from .client import HttpCollaborationClient, LoggingNotifier, parse_identity
from .schema import CollaborationPayload, UserPayload

__all__ = [
    "CollaborationPayload",
    "HttpCollaborationClient",
    "LoggingNotifier",
    "UserPayload",
    "parse_identity",
]
