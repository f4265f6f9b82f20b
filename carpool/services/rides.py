"""
Ride Service Facade
===================

Turns requests into engine calls and persists the result.

Write path (every mutating operation)
-------------------------------------
1. Open a fresh unit-of-work and load the ride (missing -> ``RideNotFound``).
2. Apply a pure engine / feedback function to the snapshot.
3. A ``RideFailure`` is raised unchanged as ``RideRuleViolation``.
4. Otherwise ``compare_and_swap`` against the version read in step 1.
5. On ``VersionConflict`` start over from step 1, at most
   ``settings.cas_max_attempts`` times, then give up with ``Contention``.

No ride state is cached between attempts or between requests; the row's
``version`` column is the only thing concurrent requests share.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carpool.config import settings
from carpool.domain import feedback, lifecycle
from carpool.domain.entities import Ride
from carpool.domain.enums import RideStatus
from carpool.domain.errors import (
    Contention,
    NotRideDriver,
    RideNotFound,
    RideRuleViolation,
    VersionConflict,
)
from carpool.domain.failures import Outcome, RideFailure
from carpool.infrastructure.database import session_scope
from carpool.infrastructure.repositories import RideRepository

logger = logging.getLogger(__name__)

Operation = Callable[[Ride], Outcome]


class RideService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.max_attempts = max_attempts or settings.cas_max_attempts

    # ── Reads / creation ──────────────────────────────────────────────

    async def create_ride(
        self,
        driver_id: str,
        total_seats: int,
        start_location_id: str,
        destination_id: str,
        scheduled_time: datetime,
    ) -> Ride:
        async with session_scope(self.session_factory) as session:
            ride = await RideRepository(session).create_ride(
                driver_id=driver_id,
                total_seats=total_seats,
                start_location_id=start_location_id,
                destination_id=destination_id,
                scheduled_time=scheduled_time,
            )
        logger.info(
            "Ride %s created by driver %s with %d seats",
            ride.id,
            driver_id,
            total_seats,
        )
        return ride

    async def get_ride(self, ride_id: int) -> Ride:
        async with session_scope(self.session_factory) as session:
            ride = await RideRepository(session).get_by_id(ride_id)
        if ride is None:
            raise RideNotFound(ride_id)
        return ride

    async def list_active_rides(self) -> list[Ride]:
        async with session_scope(self.session_factory) as session:
            return await RideRepository(session).get_active_rides()

    # ── Seat allocation ───────────────────────────────────────────────

    async def book_seat(self, ride_id: int, passenger_id: str) -> Ride:
        return await self._mutate(
            ride_id,
            lambda ride: lifecycle.book_seat(ride, passenger_id),
            action=f"seat booked by {passenger_id}",
        )

    async def cancel_seat(self, ride_id: int, passenger_id: str) -> Ride:
        return await self._mutate(
            ride_id,
            lambda ride: lifecycle.cancel_seat(ride, passenger_id),
            action=f"seat cancelled by {passenger_id}",
        )

    # ── Lifecycle ─────────────────────────────────────────────────────

    async def change_status(
        self,
        ride_id: int,
        new_status: RideStatus,
        caller_id: Optional[str] = None,
    ) -> Ride:
        """Apply a status transition.

        When *caller_id* is given only the ride's driver may do this.
        """
        return await self._mutate(
            ride_id,
            lambda ride: lifecycle.change_status(ride, new_status),
            action=f"status -> {new_status.value}",
            driver_only=caller_id,
        )

    async def end_ride(self, ride_id: int, caller_id: Optional[str] = None) -> Ride:
        return await self._mutate(
            ride_id,
            lifecycle.end_ride,
            action="ride ended",
            driver_only=caller_id,
        )

    # ── Feedback ──────────────────────────────────────────────────────

    async def add_comment(
        self,
        ride_id: int,
        author_id: str,
        like: bool = False,
        dislike: bool = False,
        text: Optional[str] = None,
    ) -> Ride:
        return await self._mutate(
            ride_id,
            lambda ride: feedback.add_comment(ride, author_id, like, dislike, text),
            action=f"comment by {author_id}",
        )

    # ── Internals ─────────────────────────────────────────────────────

    async def _mutate(
        self,
        ride_id: int,
        operation: Operation,
        *,
        action: str,
        driver_only: Optional[str] = None,
    ) -> Ride:
        for attempt in range(1, self.max_attempts + 1):
            try:
                ride = await self._attempt(ride_id, operation, driver_only)
            except VersionConflict:
                logger.debug(
                    "Version conflict on ride %s (%s), attempt %d/%d",
                    ride_id,
                    action,
                    attempt,
                    self.max_attempts,
                )
                continue
            logger.info("Ride %s: %s (version %d)", ride_id, action, ride.version)
            return ride

        logger.warning(
            "Ride %s: giving up on %s after %d conflicting attempts",
            ride_id,
            action,
            self.max_attempts,
        )
        raise Contention(ride_id, self.max_attempts)

    async def _attempt(
        self,
        ride_id: int,
        operation: Operation,
        driver_only: Optional[str],
    ) -> Ride:
        async with session_scope(self.session_factory) as session:
            repo = RideRepository(session)
            ride = await repo.get_by_id(ride_id)
            if ride is None:
                raise RideNotFound(ride_id)
            if driver_only is not None and driver_only != ride.driver_id:
                raise NotRideDriver(ride_id, driver_only)

            outcome = operation(ride)
            if isinstance(outcome, RideFailure):
                raise RideRuleViolation(outcome)

            return await repo.compare_and_swap(ride_id, ride.version, outcome)
