"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class SubscriptionType(StrEnum):
    NONE = "none"
    DELEGATION = "delegation"


class InviteStatus(IntEnum):
    """Sharee answer to a delegated address book share."""

    NO_RESPONSE = 1
    ACCEPTED = 2
    DECLINED = 3


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"
