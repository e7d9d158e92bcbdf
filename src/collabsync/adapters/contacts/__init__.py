"""Public interface for the contacts adapter."""

from __future__ import annotations

from .client import HttpAddressbook, HttpAddressbookClient, HttpAddressbookHome
from .schema import AddressbookListResponse, AddressbookPayload, ShellPayload
from .translator import parse_addressbook, parse_book_href, parse_shell

__all__ = [
    "AddressbookListResponse",
    "AddressbookPayload",
    "HttpAddressbook",
    "HttpAddressbookClient",
    "HttpAddressbookHome",
    "ShellPayload",
    "parse_addressbook",
    "parse_book_href",
    "parse_shell",
]
