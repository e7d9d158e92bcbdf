"""Translate contacts API payloads into remote descriptors."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from collabsync.domain.model import RemoteDescriptor, SourceRef, SubscriptionType

from .schema import AddressbookPayload, ShellPayload

if TYPE_CHECKING:
    from collabsync.domain.ports import CreatePayload, UpdatePayload

_BOOK_HREF = re.compile(r"/addressbooks/(?P<book_id>[^/]+)/(?P<book_name>[^/]+?)\.(?:json|vcf)$")


def parse_book_href(href: str | None) -> tuple[str | None, str | None]:
    if not href:
        return None, None
    match = _BOOK_HREF.search(href)
    if match is None:
        return None, None
    return match.group("book_id"), match.group("book_name")


def _subscription_type(value: str | None) -> SubscriptionType:
    try:
        return SubscriptionType(value) if value else SubscriptionType.NONE
    except ValueError:
        return SubscriptionType.NONE


def parse_addressbook(payload: AddressbookPayload | Mapping[str, object]) -> RemoteDescriptor:
    model = (
        payload
        if isinstance(payload, AddressbookPayload)
        else AddressbookPayload.model_validate(payload)
    )
    href = model.links.self_.href if model.links.self_ else None
    book_id, book_name = parse_book_href(href)

    source: SourceRef | None = None
    if model.source is not None:
        source_href = model.source.links.self_.href if model.source.links.self_ else None
        source_id, source_name = parse_book_href(source_href)
        source = SourceRef(book_id=source_id, book_name=source_name, name=model.source.name)

    return RemoteDescriptor(
        name=model.name,
        description=model.description,
        self_link=href,
        book_id=book_id,
        book_name=book_name,
        subscription_type=_subscription_type(model.subscription_type),
        source=source,
        is_subscription=source is not None,
    )


def parse_shell(payload: ShellPayload | Mapping[str, object]) -> RemoteDescriptor:
    model = payload if isinstance(payload, ShellPayload) else ShellPayload.model_validate(payload)
    self_link = model.self_link
    if self_link is None and model.links is not None and model.links.self_ is not None:
        self_link = model.links.self_.href

    source = (
        SourceRef(
            book_id=model.source.book_id,
            book_name=model.source.book_name,
            name=model.source.name,
        )
        if model.source is not None
        else None
    )
    return RemoteDescriptor(
        name=model.name,
        description=model.description,
        self_link=self_link,
        book_id=model.book_id,
        book_name=model.book_name,
        subscription_type=_subscription_type(model.subscription_type),
        source=source,
        is_subscription=model.is_subscription,
        sharees=tuple(model.sharees),
    )


def create_body(payload: CreatePayload) -> dict[str, object]:
    body: dict[str, object] = {}
    if "name" in payload:
        body["dav:name"] = payload["name"]
    if "description" in payload:
        body["carddav:description"] = payload["description"]
    if "type" in payload:
        body["type"] = payload["type"]
    if "source-link" in payload:
        body["openpaas:source"] = {"_links": payload["source-link"]}
    return body


def update_body(payload: UpdatePayload) -> dict[str, object]:
    body: dict[str, object] = {}
    if "name" in payload:
        body["dav:name"] = payload["name"]
    if "description" in payload:
        body["carddav:description"] = payload["description"]
    return body
