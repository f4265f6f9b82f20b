"""
Ride endpoints
==============

POST   /api/v1/rides                      -- offer a ride (caller is the driver)
GET    /api/v1/rides/{ride_id}            -- current ride state
POST   /api/v1/rides/{ride_id}/seats      -- book a seat for the caller
DELETE /api/v1/rides/{ride_id}/seats      -- give the caller's seat back
PATCH  /api/v1/rides/{ride_id}/status     -- driver moves the ride along
PUT    /api/v1/rides/{ride_id}/end        -- driver finishes the ride
POST   /api/v1/rides/{ride_id}/comments   -- participant leaves feedback

Errors raised by ``RideService`` are mapped to status codes by the
handler registered in ``carpool.api.app``.
"""

from fastapi import APIRouter, Depends, Request

from carpool.api.dependencies import get_caller_id, get_ride_service
from carpool.api.middleware import limiter
from carpool.api.schemas import (
    CommentCreateRequest,
    ErrorResponse,
    RideCreateRequest,
    RideResponse,
    StatusChangeRequest,
)
from carpool.config import settings
from carpool.services.rides import RideService

router = APIRouter(prefix="/rides", tags=["rides"])

_ERRORS = {
    404: {"model": ErrorResponse, "description": "Ride not found"},
    409: {"model": ErrorResponse, "description": "Rejected by ride rules or contention"},
}


@router.post(
    "",
    status_code=201,
    response_model=RideResponse,
    summary="Offer a ride",
    responses={422: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def create_ride(
    request: Request,
    body: RideCreateRequest,
    caller_id: str = Depends(get_caller_id),
    service: RideService = Depends(get_ride_service),
):
    ride = await service.create_ride(
        driver_id=caller_id,
        total_seats=body.total_seats,
        start_location_id=body.start_location_id,
        destination_id=body.destination_id,
        scheduled_time=body.scheduled_time,
    )
    return RideResponse.model_validate(ride)


@router.get(
    "/{ride_id}",
    response_model=RideResponse,
    summary="Get ride state",
    responses={404: _ERRORS[404]},
)
@limiter.limit(settings.rate_limit)
async def get_ride(
    request: Request,
    ride_id: int,
    service: RideService = Depends(get_ride_service),
):
    ride = await service.get_ride(ride_id)
    return RideResponse.model_validate(ride)


@router.post(
    "/{ride_id}/seats",
    response_model=RideResponse,
    summary="Book a seat",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def book_seat(
    request: Request,
    ride_id: int,
    caller_id: str = Depends(get_caller_id),
    service: RideService = Depends(get_ride_service),
):
    ride = await service.book_seat(ride_id, caller_id)
    return RideResponse.model_validate(ride)


@router.delete(
    "/{ride_id}/seats",
    response_model=RideResponse,
    summary="Cancel a booked seat",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def cancel_seat(
    request: Request,
    ride_id: int,
    caller_id: str = Depends(get_caller_id),
    service: RideService = Depends(get_ride_service),
):
    ride = await service.cancel_seat(ride_id, caller_id)
    return RideResponse.model_validate(ride)


@router.patch(
    "/{ride_id}/status",
    response_model=RideResponse,
    summary="Change ride status",
    description=(
        "Valid moves: WAITING -> EN_ROUTE, EN_ROUTE -> FINISHED, "
        "EN_ROUTE -> CRASHED.  Only the ride's driver may change status."
    ),
    responses={**_ERRORS, 403: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def change_status(
    request: Request,
    ride_id: int,
    body: StatusChangeRequest,
    caller_id: str = Depends(get_caller_id),
    service: RideService = Depends(get_ride_service),
):
    ride = await service.change_status(ride_id, body.status, caller_id=caller_id)
    return RideResponse.model_validate(ride)


@router.put(
    "/{ride_id}/end",
    response_model=RideResponse,
    summary="Finish an en-route ride",
    responses={**_ERRORS, 403: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def end_ride(
    request: Request,
    ride_id: int,
    caller_id: str = Depends(get_caller_id),
    service: RideService = Depends(get_ride_service),
):
    ride = await service.end_ride(ride_id, caller_id=caller_id)
    return RideResponse.model_validate(ride)


@router.post(
    "/{ride_id}/comments",
    response_model=RideResponse,
    summary="Comment on a ride",
    description="One comment per participant; like and dislike are exclusive.",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def add_comment(
    request: Request,
    ride_id: int,
    body: CommentCreateRequest,
    caller_id: str = Depends(get_caller_id),
    service: RideService = Depends(get_ride_service),
):
    ride = await service.add_comment(
        ride_id,
        caller_id,
        like=body.like,
        dislike=body.dislike,
        text=body.text,
    )
    return RideResponse.model_validate(ride)
