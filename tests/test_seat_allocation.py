"""Unit tests for seat booking and cancellation."""

import pytest

from carpool.domain.entities import Ride
from carpool.domain.enums import FailureKind, RideStatus
from carpool.domain.failures import RideFailure
from carpool.domain.lifecycle import book_seat, cancel_seat, change_status

from tests.conftest import DRIVER


def _seats_balance(ride: Ride) -> bool:
    return ride.available_seats + len(ride.passengers) == ride.total_seats


class TestBookSeat:
    def test_booking_takes_one_seat(self, waiting_ride):
        ride = book_seat(waiting_ride, "alice")
        assert ride.passengers == ("alice",)
        assert ride.available_seats == 1
        assert _seats_balance(ride)

    def test_booking_preserves_order(self, waiting_ride):
        ride = book_seat(book_seat(waiting_ride, "alice"), "bob")
        assert ride.passengers == ("alice", "bob")
        assert ride.available_seats == 0

    def test_double_booking_rejected(self, waiting_ride):
        ride = book_seat(waiting_ride, "alice")
        outcome = book_seat(ride, "alice")
        assert isinstance(outcome, RideFailure)
        assert outcome.kind == FailureKind.ALREADY_BOOKED

    def test_full_ride_rejects_and_stays_unchanged(self, waiting_ride):
        full = book_seat(book_seat(waiting_ride, "alice"), "bob")
        for _ in range(3):
            outcome = book_seat(full, "carol")
            assert isinstance(outcome, RideFailure)
            assert outcome.kind == FailureKind.NO_CAPACITY
        assert full.available_seats == 0
        assert full.passengers == ("alice", "bob")

    def test_driver_cannot_book_own_ride(self, waiting_ride):
        outcome = book_seat(waiting_ride, DRIVER)
        assert isinstance(outcome, RideFailure)
        assert outcome.kind == FailureKind.SELF_BOOKING

    @pytest.mark.parametrize(
        "status", [RideStatus.EN_ROUTE, RideStatus.FINISHED, RideStatus.CRASHED]
    )
    def test_booking_requires_waiting(self, waiting_ride, status):
        outcome = book_seat(Ride(driver_id=DRIVER, status=status), "alice")
        assert isinstance(outcome, RideFailure)
        assert outcome.kind == FailureKind.RIDE_NOT_WAITING


class TestCancelSeat:
    def test_cancel_gives_seat_back(self, waiting_ride):
        ride = cancel_seat(book_seat(waiting_ride, "alice"), "alice")
        assert ride.passengers == ()
        assert ride.available_seats == 2
        assert ride.former_passengers == ("alice",)
        assert _seats_balance(ride)

    def test_cancel_without_booking_rejected(self, waiting_ride):
        outcome = cancel_seat(waiting_ride, "alice")
        assert isinstance(outcome, RideFailure)
        assert outcome.kind == FailureKind.NOT_BOOKED

    def test_rebook_after_cancel(self, waiting_ride):
        ride = book_seat(waiting_ride, "alice")
        ride = cancel_seat(ride, "alice")
        ride = book_seat(ride, "alice")
        ride = cancel_seat(ride, "alice")
        assert ride.former_passengers == ("alice",)
        assert ride.available_seats == 2

    def test_finished_ride_is_frozen(self, waiting_ride):
        ride = book_seat(waiting_ride, "alice")
        ride = change_status(ride, RideStatus.EN_ROUTE)
        ride = change_status(ride, RideStatus.FINISHED)

        for outcome in (cancel_seat(ride, "alice"), book_seat(ride, "bob")):
            assert isinstance(outcome, RideFailure)
            assert outcome.kind == FailureKind.RIDE_NOT_WAITING
        assert ride.passengers == ("alice",)


def test_seat_invariant_over_mixed_sequence():
    ride = Ride(driver_id=DRIVER, total_seats=3, available_seats=3)
    steps = [
        (book_seat, "a"),
        (book_seat, "b"),
        (cancel_seat, "a"),
        (book_seat, "c"),
        (book_seat, "d"),
        (book_seat, "e"),  # full
        (cancel_seat, "zz"),  # never booked
        (cancel_seat, "b"),
        (book_seat, "a"),
    ]
    for op, user in steps:
        outcome = op(ride, user)
        if isinstance(outcome, Ride):
            ride = outcome
        assert ride.available_seats >= 0
        assert _seats_balance(ride)
        assert len(set(ride.passengers)) == len(ride.passengers)
        assert DRIVER not in ride.passengers

    assert ride.passengers == ("c", "d", "a")
