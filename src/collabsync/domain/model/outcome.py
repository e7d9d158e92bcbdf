"""Settled per-item results of a fan-out operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .descriptors import RemoteDescriptor
from .enums import OutcomeStatus


@dataclass(slots=True, frozen=True)
class Success[T]:
    value: T
    status: Literal[OutcomeStatus.SUCCESS] = OutcomeStatus.SUCCESS

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Failure:
    error: Exception
    status: Literal[OutcomeStatus.FAILURE] = OutcomeStatus.FAILURE

    @property
    def ok(self) -> bool:
        return False


type Outcome[T] = Success[T] | Failure
type BatchOutcome = Success[RemoteDescriptor] | Failure
