"""Domain enumerations and state-transition rules."""

import enum


class RideStatus(str, enum.Enum):
    WAITING = "WAITING"
    EN_ROUTE = "EN_ROUTE"
    FINISHED = "FINISHED"
    CRASHED = "CRASHED"


# State machine: maps current status -> set of valid next statuses
RIDE_TRANSITIONS: dict[RideStatus, set[RideStatus]] = {
    RideStatus.WAITING: {RideStatus.EN_ROUTE},
    RideStatus.EN_ROUTE: {RideStatus.FINISHED, RideStatus.CRASHED},
    RideStatus.FINISHED: set(),
    RideStatus.CRASHED: set(),
}

TERMINAL_STATUSES = frozenset({RideStatus.FINISHED, RideStatus.CRASHED})


class FailureCategory(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    STATE_CONFLICT = "STATE_CONFLICT"
    CONTENTION = "CONTENTION"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class FailureKind(str, enum.Enum):
    """Business-rule violations reported by the engine and feedback rules."""

    INVALID_TRANSITION = "INVALID_TRANSITION"
    RIDE_NOT_WAITING = "RIDE_NOT_WAITING"
    ALREADY_BOOKED = "ALREADY_BOOKED"
    NOT_BOOKED = "NOT_BOOKED"
    NO_CAPACITY = "NO_CAPACITY"
    SELF_BOOKING = "SELF_BOOKING"
    DUPLICATE_COMMENT = "DUPLICATE_COMMENT"
    INVALID_RATING = "INVALID_RATING"
    NOT_PARTICIPANT = "NOT_PARTICIPANT"
