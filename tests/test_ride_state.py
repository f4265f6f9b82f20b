"""Unit tests for ride status transitions."""

from dataclasses import replace

import pytest

from carpool.domain.entities import Ride
from carpool.domain.enums import FailureKind, RideStatus
from carpool.domain.failures import RideFailure
from carpool.domain.lifecycle import can_transition, change_status, end_ride

VALID_EDGES = {
    (RideStatus.WAITING, RideStatus.EN_ROUTE),
    (RideStatus.EN_ROUTE, RideStatus.FINISHED),
    (RideStatus.EN_ROUTE, RideStatus.CRASHED),
}


class TestRideStateMachine:
    def test_initial_status_is_waiting(self):
        ride = Ride()
        assert ride.status == RideStatus.WAITING
        assert ride.ride_finished is False

    @pytest.mark.parametrize("current", list(RideStatus))
    @pytest.mark.parametrize("target", list(RideStatus))
    def test_transition_matrix(self, current, target):
        ride = Ride(status=current)
        outcome = change_status(ride, target)

        if (current, target) in VALID_EDGES:
            assert isinstance(outcome, Ride)
            assert outcome.status == target
            assert can_transition(current, target)
        else:
            assert isinstance(outcome, RideFailure)
            assert outcome.kind == FailureKind.INVALID_TRANSITION
            assert not can_transition(current, target)
        # the input snapshot is never modified
        assert ride.status == current

    # ── Valid transitions ─────────────────────────────────────────

    def test_waiting_to_en_route(self):
        ride = change_status(Ride(), RideStatus.EN_ROUTE)
        assert ride.status == RideStatus.EN_ROUTE
        assert not ride.ride_finished

    def test_en_route_to_crashed_finishes_ride(self):
        ride = change_status(Ride(status=RideStatus.EN_ROUTE), RideStatus.CRASHED)
        assert ride.ride_finished

    def test_end_ride_from_en_route(self):
        ride = end_ride(Ride(status=RideStatus.EN_ROUTE))
        assert ride.status == RideStatus.FINISHED
        assert ride.ride_finished

    def test_transition_keeps_passengers(self):
        ride = Ride(
            driver_id="d",
            total_seats=3,
            available_seats=1,
            passengers=("a", "b"),
        )
        moved = change_status(ride, RideStatus.EN_ROUTE)
        assert moved.passengers == ("a", "b")
        assert moved.available_seats == 1
        assert moved == replace(ride, status=RideStatus.EN_ROUTE)

    # ── Invalid transitions ───────────────────────────────────────

    def test_waiting_cannot_skip_to_finished(self):
        outcome = end_ride(Ride(status=RideStatus.WAITING))
        assert isinstance(outcome, RideFailure)
        assert outcome.kind == FailureKind.INVALID_TRANSITION

    def test_finished_cannot_be_finished_again(self):
        outcome = end_ride(Ride(status=RideStatus.FINISHED))
        assert isinstance(outcome, RideFailure)
        assert "FINISHED" in outcome.message

    def test_crashed_to_anything_fails(self):
        for target in RideStatus:
            outcome = change_status(Ride(status=RideStatus.CRASHED), target)
            assert isinstance(outcome, RideFailure)
