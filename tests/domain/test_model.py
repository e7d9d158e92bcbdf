from __future__ import annotations

import pytest

from collabsync.domain.model import (
    Failure,
    OutcomeStatus,
    RemoteDescriptor,
    SourceRef,
    SubscriptionType,
    Success,
)


def test_merged_overlays_set_fields_only() -> None:
    shell = RemoteDescriptor(name="local", description="kept", self_link="/addressbooks/1/a.json")
    server = RemoteDescriptor(name="server", book_id="123", book_name="generated")

    merged = shell.merged(server)

    assert merged == RemoteDescriptor(
        name="server",
        description="kept",
        self_link="/addressbooks/1/a.json",
        book_id="123",
        book_name="generated",
    )


def test_merged_applies_overrides_last() -> None:
    shell = RemoteDescriptor(
        name="shared",
        subscription_type=SubscriptionType.DELEGATION,
        source=SourceRef(name="source"),
    )
    server = RemoteDescriptor(name="server name")

    merged = shell.merged(server, name="source", is_subscription=True)

    assert merged.name == "source"
    assert merged.is_subscription
    assert merged.subscription_type is SubscriptionType.DELEGATION


def test_merged_with_nothing_returns_same_descriptor() -> None:
    shell = RemoteDescriptor(name="same")

    assert shell.merged(None) is shell


def test_public_subscription_keeps_only_link_fields() -> None:
    book = RemoteDescriptor(
        name="public",
        description="everyone",
        self_link="/addressbooks/456/public.json",
        book_id="456",
        book_name="public",
    )

    shell = book.as_public_subscription()

    assert shell == RemoteDescriptor(
        name="public", description="everyone", self_link="/addressbooks/456/public.json"
    )


def test_public_subscription_requires_self_link() -> None:
    with pytest.raises(ValueError, match="self link"):
        RemoteDescriptor(name="private").as_public_subscription()


def test_outcomes_report_status() -> None:
    success = Success("value")
    failure = Failure(RuntimeError("boom"))

    assert success.ok and success.status is OutcomeStatus.SUCCESS
    assert not failure.ok and failure.status is OutcomeStatus.FAILURE
