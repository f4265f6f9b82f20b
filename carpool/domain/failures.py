"""Typed failures returned (not raised) by the pure domain operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .entities import Ride
from .enums import FailureCategory, FailureKind


@dataclass(frozen=True)
class RideFailure:
    kind: FailureKind
    message: str

    @property
    def category(self) -> FailureCategory:
        # Every engine / feedback rule violation is a conflict with the
        # ride's current state.
        return FailureCategory.STATE_CONFLICT


# What every engine operation hands back.
Outcome = Union[Ride, RideFailure]
