"""Resolution of the remote home and resource a variant operates against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never

from collabsync.domain.errors import UnclassifiableDescriptorError

from .classify import DelegatedShare, Owned, PublicLink

if TYPE_CHECKING:
    from collabsync.domain.model import RemoteDescriptor

    from .classify import Variant


@dataclass(slots=True, frozen=True)
class Home:
    collection_id: str
    resource_name: str | None = None


def resolve_home(variant: Variant, current_user_id: str) -> Home:
    """``resource_name`` stays unset when the server assigns it on create."""

    match variant:
        case Owned(descriptor=descriptor):
            return Home(current_user_id, descriptor.book_name)
        case PublicLink():
            return Home(current_user_id)
        case DelegatedShare(descriptor=descriptor):
            # classify() guarantees both identifiers for delegated shares
            assert descriptor.book_id is not None
            return Home(descriptor.book_id, descriptor.book_name)
        case _:
            assert_never(variant)


def resolve_share_target(descriptor: RemoteDescriptor) -> Home:
    """Home on which sharing permissions are set.

    A subscription is only a pointer; its sharees live on the backing book.
    """

    if descriptor.is_subscription:
        source = descriptor.source
        if source is None or not (source.book_id and source.book_name):
            raise UnclassifiableDescriptorError(
                "Subscription has no source book to share", descriptor=descriptor
            )
        return Home(source.book_id, source.book_name)

    if not (descriptor.book_id and descriptor.book_name):
        raise UnclassifiableDescriptorError(
            "Address book needs bookId and bookName to be shared", descriptor=descriptor
        )
    return Home(descriptor.book_id, descriptor.book_name)
