"""Remote address book descriptors ("shells").

A descriptor is built fresh from a directory or API response, handed to the
dispatcher and then discarded. Which optional fields are set decides how it is
reconciled; see ``collabsync.domain.addressbooks.classify``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .enums import SubscriptionType


@dataclass(slots=True, frozen=True, kw_only=True)
class SourceRef:
    """Backing collection of a subscription or delegated share."""

    book_id: str | None = None
    book_name: str | None = None
    name: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class RemoteDescriptor:
    name: str | None = None
    description: str | None = None
    self_link: str | None = None
    book_id: str | None = None
    book_name: str | None = None
    subscription_type: SubscriptionType = SubscriptionType.NONE
    source: SourceRef | None = None
    is_subscription: bool = False
    sharees: tuple[str, ...] = field(default_factory=tuple)

    def as_public_subscription(self) -> RemoteDescriptor:
        """Shell that subscribes to this (public) book rather than operating on it."""

        if not self.self_link:
            raise ValueError("Only address books with a self link can be subscribed to")
        return RemoteDescriptor(
            name=self.name,
            description=self.description,
            self_link=self.self_link,
        )

    def merged(self, other: RemoteDescriptor | None, **overrides: object) -> RemoteDescriptor:
        """Return a copy overlaid with the set fields of ``other`` and ``overrides``."""

        base = self
        if other is not None:
            changes = {
                name: value
                for name in _OVERLAY_FIELDS
                if (value := getattr(other, name)) not in (None, (), SubscriptionType.NONE)
            }
            if other.is_subscription:
                changes["is_subscription"] = True
            base = replace(base, **changes)
        return replace(base, **overrides) if overrides else base


_OVERLAY_FIELDS = (
    "name",
    "description",
    "self_link",
    "book_id",
    "book_name",
    "subscription_type",
    "source",
    "sharees",
)
