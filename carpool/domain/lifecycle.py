"""
Ride Lifecycle Engine
=====================

Pure functions of ``(ride snapshot, arguments) -> new snapshot | failure``.
Nothing here touches the database; the service layer owns the
load -> apply -> compare-and-swap loop.

State machine
-------------
  WAITING -> EN_ROUTE -> FINISHED | CRASHED

A ride cannot be closed straight from WAITING, and terminal states accept
no further transitions (same-state included).

Seat accounting
---------------
  available_seats + len(passengers) == total_seats

holds after every successful ``book_seat`` / ``cancel_seat``.  Seats are
only touched while the ride is WAITING, so a finished ride's passenger
list is frozen without a separate flag.

Complexity: O(p) per call, p = passengers on the ride.
"""

from __future__ import annotations

from dataclasses import replace

from .entities import Ride
from .enums import FailureKind, RideStatus, RIDE_TRANSITIONS
from .failures import Outcome, RideFailure


def can_transition(current: RideStatus, new: RideStatus) -> bool:
    return new in RIDE_TRANSITIONS.get(current, set())


def book_seat(ride: Ride, passenger_id: str) -> Outcome:
    """Reserve one seat for *passenger_id*."""
    if ride.status != RideStatus.WAITING:
        return RideFailure(
            FailureKind.RIDE_NOT_WAITING,
            f"Cannot book a seat on a ride in status {ride.status.value}",
        )
    if passenger_id in ride.passengers:
        return RideFailure(
            FailureKind.ALREADY_BOOKED,
            f"Passenger {passenger_id} already has a seat on this ride",
        )
    if ride.available_seats <= 0:
        return RideFailure(FailureKind.NO_CAPACITY, "No seats left on this ride")
    if passenger_id == ride.driver_id:
        return RideFailure(
            FailureKind.SELF_BOOKING, "The driver cannot book a seat on their own ride"
        )

    return replace(
        ride,
        passengers=ride.passengers + (passenger_id,),
        available_seats=ride.available_seats - 1,
    )


def cancel_seat(ride: Ride, passenger_id: str) -> Outcome:
    """Give back the seat held by *passenger_id*."""
    if ride.status != RideStatus.WAITING:
        return RideFailure(
            FailureKind.RIDE_NOT_WAITING,
            f"Cannot cancel a seat on a ride in status {ride.status.value}",
        )
    if passenger_id not in ride.passengers:
        return RideFailure(
            FailureKind.NOT_BOOKED,
            f"Passenger {passenger_id} has no seat on this ride",
        )

    former = ride.former_passengers
    if passenger_id not in former:
        former = former + (passenger_id,)
    return replace(
        ride,
        passengers=tuple(p for p in ride.passengers if p != passenger_id),
        former_passengers=former,
        available_seats=ride.available_seats + 1,
    )


def change_status(ride: Ride, new_status: RideStatus) -> Outcome:
    """Move to *new_status* if the edge exists in ``RIDE_TRANSITIONS``."""
    if not can_transition(ride.status, new_status):
        return RideFailure(
            FailureKind.INVALID_TRANSITION,
            f"Cannot transition from {ride.status.value} to {new_status.value}",
        )
    return replace(ride, status=new_status)


def end_ride(ride: Ride) -> Outcome:
    return change_status(ride, RideStatus.FINISHED)
