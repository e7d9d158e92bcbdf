"""Directory lookups for the invitation surface."""

from __future__ import annotations

from collections import defaultdict
from logging import getLogger
from typing import TYPE_CHECKING

from collabsync.domain.errors import CollabSyncError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from collabsync.domain.model import Collaboration, InvitableIdentity
    from collabsync.domain.ports import CollaborationClient

log = getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5


def display_name_of(identity: InvitableIdentity) -> str:
    if identity.firstname and identity.lastname:
        return f"{identity.firstname} {identity.lastname}"
    return identity.preferred_email


def disambiguate(identities: Sequence[InvitableIdentity]) -> list[InvitableIdentity]:
    """Assign display names, suffixing the address where names collide.

    Only collisions inside ``identities`` are considered. Entries that share a
    name but also share the address are left alone.
    """

    by_label: defaultdict[str, list[InvitableIdentity]] = defaultdict(list)
    for identity in identities:
        identity.display_name = display_name_of(identity)
        by_label[identity.display_name].append(identity)

    for label, group in by_label.items():
        if len({identity.preferred_email for identity in group}) < 2:
            continue
        for identity in group:
            if label != identity.preferred_email:
                identity.display_name = f"{label} - {identity.preferred_email}"

    return list(identities)


async def search_invitable(
    client: CollaborationClient,
    scope_type: str,
    scope_id: str,
    query: str,
    *,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[InvitableIdentity]:
    """Search the directory. A failed search yields an empty result."""

    try:
        found = await client.search_invitable(scope_type, scope_id, search=query, limit=limit)
    except CollabSyncError as exc:
        log.warning("Invitable people search for %r failed: %s", query, exc)
        return []
    return disambiguate(found)


def is_manager(collaboration: Collaboration, user_id: str) -> bool:
    return user_id == collaboration.creator or user_id in collaboration.managers
