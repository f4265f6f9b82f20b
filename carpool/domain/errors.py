"""
Exceptions surfaced by the service layer.

Domain rules report violations as ``RideFailure`` values; the service
wraps them in ``RideRuleViolation`` so the API can map every error to a
status code in one place.
"""

from __future__ import annotations

from .enums import FailureCategory
from .failures import RideFailure


class RideServiceError(Exception):
    """Base class; ``category`` drives the HTTP status, ``code`` the body."""

    category: FailureCategory = FailureCategory.STATE_CONFLICT
    code: str = "RIDE_ERROR"


class RideNotFound(RideServiceError):
    category = FailureCategory.NOT_FOUND
    code = "RIDE_NOT_FOUND"

    def __init__(self, ride_id: int):
        self.ride_id = ride_id
        super().__init__(f"Ride {ride_id} not found")


class InvalidRideSpec(RideServiceError):
    category = FailureCategory.VALIDATION_ERROR
    code = "INVALID_SPEC"


class NotRideDriver(RideServiceError):
    category = FailureCategory.FORBIDDEN
    code = "NOT_RIDE_DRIVER"

    def __init__(self, ride_id: int, caller_id: str):
        self.ride_id = ride_id
        self.caller_id = caller_id
        super().__init__(f"User {caller_id} is not the driver of ride {ride_id}")


class RideRuleViolation(RideServiceError):
    category = FailureCategory.STATE_CONFLICT

    def __init__(self, failure: RideFailure):
        self.failure = failure
        self.category = failure.category
        self.code = failure.kind.value
        super().__init__(failure.message)


class Contention(RideServiceError):
    category = FailureCategory.CONTENTION
    code = "CONTENTION"

    def __init__(self, ride_id: int, attempts: int):
        self.ride_id = ride_id
        self.attempts = attempts
        super().__init__(
            f"Ride {ride_id} changed concurrently {attempts} times; try again"
        )


class StoreUnavailable(RideServiceError):
    category = FailureCategory.STORE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"


class VersionConflict(Exception):
    """The stored ride no longer has the version the caller read."""

    def __init__(self, ride_id: int, expected_version: int):
        self.ride_id = ride_id
        self.expected_version = expected_version
        super().__init__(
            f"Ride {ride_id} is no longer at version {expected_version}"
        )
