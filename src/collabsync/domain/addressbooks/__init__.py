"""Address book reconciliation: classification, home resolution and dispatch."""

from __future__ import annotations

from .classify import DelegatedShare, Owned, PublicLink, Variant, VariantKind, classify
from .dispatch import dispatch_one, reconcile
from .resolve import Home, resolve_home, resolve_share_target
from .service import AddressbookService

__all__ = [
    "AddressbookService",
    "DelegatedShare",
    "Home",
    "Owned",
    "PublicLink",
    "Variant",
    "VariantKind",
    "classify",
    "dispatch_one",
    "reconcile",
    "resolve_home",
    "resolve_share_target",
]
