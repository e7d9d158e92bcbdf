"""Pydantic models describing the contacts API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ContactsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LinkModel(ContactsBaseModel):
    href: str


class LinksModel(ContactsBaseModel):
    self_: LinkModel | None = Field(default=None, alias="self")


class SourcePayload(ContactsBaseModel):
    links: LinksModel = Field(default_factory=LinksModel, alias="_links")
    name: str | None = Field(default=None, alias="dav:name")


class AddressbookPayload(ContactsBaseModel):
    links: LinksModel = Field(default_factory=LinksModel, alias="_links")
    name: str | None = Field(default=None, alias="dav:name")
    description: str | None = Field(default=None, alias="carddav:description")
    type: str | None = None
    source: SourcePayload | None = Field(default=None, alias="openpaas:source")
    subscription_type: str | None = Field(default=None, alias="openpaas:subscription-type")

    _normalize_description = field_validator("description", mode="before")(_blank_to_none)


class EmbeddedAddressbooks(ContactsBaseModel):
    addressbooks: list[AddressbookPayload] = Field(
        default_factory=list, alias="dav:addressbook"
    )


class AddressbookListResponse(ContactsBaseModel):
    embedded: EmbeddedAddressbooks = Field(
        default_factory=EmbeddedAddressbooks, alias="_embedded"
    )


class ShellSourcePayload(ContactsBaseModel):
    book_id: str | None = Field(default=None, alias="bookId")
    book_name: str | None = Field(default=None, alias="bookName")
    name: str | None = None


class ShellPayload(ContactsBaseModel):
    """Address book shell as handed over by a directory search."""

    name: str | None = None
    description: str | None = None
    self_link: str | None = Field(default=None, alias="selfLink")
    links: LinksModel | None = Field(default=None, alias="_links")
    book_id: str | None = Field(default=None, alias="bookId")
    book_name: str | None = Field(default=None, alias="bookName")
    subscription_type: str | None = Field(default=None, alias="subscriptionType")
    source: ShellSourcePayload | None = None
    is_subscription: bool = Field(default=False, alias="isSubscription")
    sharees: list[str] = Field(default_factory=list)

    _normalize_ids = field_validator("book_id", "book_name", "self_link", mode="before")(
        _blank_to_none
    )
