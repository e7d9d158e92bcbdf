"""Wire payloads built from descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collabsync.domain.model import RemoteDescriptor
    from collabsync.domain.ports import AcceptSharePayload, CreatePayload, UpdatePayload

SUBSCRIPTION_TYPE = "subscription"


def subscription_payload(descriptor: RemoteDescriptor) -> CreatePayload:
    payload: CreatePayload = {
        "description": descriptor.description or "",
        "type": SUBSCRIPTION_TYPE,
        "source-link": {"self": {"href": descriptor.self_link or ""}},
    }
    if descriptor.name is not None:
        payload["name"] = descriptor.name
    return payload


def create_payload(descriptor: RemoteDescriptor) -> CreatePayload:
    payload: CreatePayload = {}
    if descriptor.name is not None:
        payload["name"] = descriptor.name
    if descriptor.description is not None:
        payload["description"] = descriptor.description
    return payload


def update_payload(descriptor: RemoteDescriptor) -> UpdatePayload:
    payload: UpdatePayload = {}
    if descriptor.name is not None:
        payload["name"] = descriptor.name
    if descriptor.description is not None:
        payload["description"] = descriptor.description
    return payload


def accept_share_payload(descriptor: RemoteDescriptor) -> AcceptSharePayload:
    source = descriptor.source
    return {"displayname": source.name if source is not None else None}
