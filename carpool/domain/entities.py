"""
Domain entities.

Patterns used
-------------
- **Immutable snapshots**: ``Ride`` and ``Comment`` are frozen; every
  lifecycle operation returns a new ``Ride`` built with
  ``dataclasses.replace`` so a failed operation can never leave a
  half-applied change behind.
- **Optimistic concurrency**: ``Ride.version`` is the token the store
  compares before accepting a new snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import RideStatus, TERMINAL_STATUSES


# ── Value Object ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Comment:
    author_id: str
    like: bool = False
    dislike: bool = False
    text: Optional[str] = None
    created_at: Optional[datetime] = None


# ── Aggregate root ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Ride:
    id: Optional[int] = None
    driver_id: str = ""
    total_seats: int = 1
    available_seats: int = 1
    passengers: tuple[str, ...] = ()
    former_passengers: tuple[str, ...] = ()
    status: RideStatus = RideStatus.WAITING
    start_location_id: str = ""
    destination_id: str = ""
    scheduled_time: Optional[datetime] = None
    comments: tuple[Comment, ...] = ()
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def ride_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def is_participant(self, user_id: str) -> bool:
        """Driver, current passenger or a passenger who later cancelled."""
        return (
            user_id == self.driver_id
            or user_id in self.passengers
            or user_id in self.former_passengers
        )

    def has_commented(self, user_id: str) -> bool:
        return any(c.author_id == user_id for c in self.comments)
