"""Logging setup for the collabsync CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Route every ``collabsync.*`` logger to stderr in one terse line per record.

    Batch summaries and notifier messages are emitted at INFO, per-item
    failures at WARNING. ``--verbose`` passes ``logging.DEBUG``; ``force``
    replaces handlers installed earlier in the same process.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
