from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from collabsync.app import (
    invite_users,
    list_addressbooks,
    share_addressbook,
    subscribe_addressbooks,
)
from collabsync.config import ConfigurationError, configure_logging
from collabsync.domain.errors import ValidationError
from collabsync.domain.invitations import SubmitStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise address books and invitations")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List the current user's address books")

    subscribe = subparsers.add_parser("subscribe", help="Reconcile address book shells")
    subscribe.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="JSON file holding an array of address book shells",
    )
    subscribe.add_argument(
        "--from-home",
        type=str,
        help="Subscribe to every public address book of this home",
    )

    share = subparsers.add_parser("share", help="Share an address book")
    share.add_argument("book_name", help="Book name of the address book to share")
    share.add_argument("sharees", nargs="+", help="Identities to share with")

    invite = subparsers.add_parser("invite", help="Invite users into a collaboration")
    invite.add_argument("object_type", help="Collaboration type, e.g. community")
    invite.add_argument("collaboration_id", help="Collaboration id")
    invite.add_argument("terms", nargs="+", help="Names or emails to look up and invite")

    return parser.parse_args(list(argv))


def _load_shells(path: Path) -> list[object]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read shells from {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of shells in {path}")
    return list(payload)


def _run_subscribe(args: argparse.Namespace) -> int:
    if args.file is None and args.from_home is None:
        raise ValueError("Give a shells file or --from-home")
    shells = _load_shells(args.file) if args.file is not None else []
    outcomes = subscribe_addressbooks(shells, from_home=args.from_home)
    failed = 0
    for index, outcome in enumerate(outcomes):
        if outcome.ok:
            log.info("[%d] ok: %s", index, getattr(outcome, "value", None))
        else:
            failed += 1
            log.warning("[%d] failed: %s", index, getattr(outcome, "error", None))
    return 1 if failed else 0


def _run_invite(args: argparse.Namespace) -> int:
    report = invite_users(args.object_type, args.collaboration_id, args.terms)
    if report.status is SubmitStatus.COMPLETED:
        for identity in report.invited:
            log.info("Invited %s", identity.display_name or identity.id)
        for identity in report.failed:
            log.warning("Could not invite %s", identity.display_name or identity.id)
    else:
        log.warning("Nothing submitted: %s", report.status.value)
    return 0 if report.all_succeeded else 1


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "list":
            for book in list_addressbooks():
                kind = "subscription" if book.is_subscription else "owned"
                log.info("%s\t%s\t%s", book.book_name, kind, book.name)
            exit_code = 0
        elif parsed_args.command == "subscribe":
            exit_code = _run_subscribe(parsed_args)
        elif parsed_args.command == "share":
            book = share_addressbook(parsed_args.book_name, parsed_args.sharees)
            log.info("Shared %s with %s", book.name, ", ".join(parsed_args.sharees))
            exit_code = 0
        elif parsed_args.command == "invite":
            exit_code = _run_invite(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ValueError, ValidationError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
