"""Descriptor classification into a closed set of handling variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from collabsync.domain.errors import UnclassifiableDescriptorError
from collabsync.domain.model import RemoteDescriptor, SubscriptionType


class VariantKind(StrEnum):
    OWNED = "owned"
    PUBLIC_LINK = "public_link"
    DELEGATED_SHARE = "delegated_share"


@dataclass(slots=True, frozen=True)
class Owned:
    """Address book in the caller's own home: plain create or update."""

    descriptor: RemoteDescriptor
    kind: Literal[VariantKind.OWNED] = VariantKind.OWNED


@dataclass(slots=True, frozen=True)
class PublicLink:
    """Publicly discoverable book the caller is not yet subscribed to."""

    descriptor: RemoteDescriptor
    kind: Literal[VariantKind.PUBLIC_LINK] = VariantKind.PUBLIC_LINK


@dataclass(slots=True, frozen=True)
class DelegatedShare:
    """Book shared with the caller; must be accepted, not created."""

    descriptor: RemoteDescriptor
    kind: Literal[VariantKind.DELEGATED_SHARE] = VariantKind.DELEGATED_SHARE


type Variant = Owned | PublicLink | DelegatedShare


def classify(descriptor: object) -> Variant:
    """Map a descriptor to its variant. First matching rule wins.

    Raises ``UnclassifiableDescriptorError`` when the descriptor cannot be
    routed to any remote operation.
    """

    if not isinstance(descriptor, RemoteDescriptor):
        raise UnclassifiableDescriptorError(
            f"Expected a remote descriptor, got {type(descriptor).__name__}",
            descriptor=descriptor,
        )

    if descriptor.subscription_type is SubscriptionType.DELEGATION:
        if not (descriptor.book_id and descriptor.book_name) or descriptor.source is None:
            raise UnclassifiableDescriptorError(
                "Delegated share needs bookId, bookName and a source",
                descriptor=descriptor,
            )
        return DelegatedShare(descriptor)

    if descriptor.self_link and not descriptor.book_id:
        return PublicLink(descriptor)

    if descriptor.is_subscription and not descriptor.book_name:
        raise UnclassifiableDescriptorError(
            "Subscription has neither a source link nor a book name",
            descriptor=descriptor,
        )
    if not (descriptor.name or descriptor.book_name):
        raise UnclassifiableDescriptorError(
            "Descriptor has no name, book name or source link",
            descriptor=descriptor,
        )
    return Owned(descriptor)
