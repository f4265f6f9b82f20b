"""
Admin / observability endpoints
===============================

GET /api/v1/admin/active-rides -- rides that are not finished or crashed
GET /api/v1/admin/health       -- simple health check
"""

from fastapi import APIRouter, Depends, Request

from carpool.api.dependencies import get_ride_service
from carpool.api.middleware import limiter
from carpool.api.schemas import HealthResponse, RideResponse
from carpool.config import settings
from carpool.services.rides import RideService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/active-rides",
    response_model=list[RideResponse],
    summary="List waiting and en-route rides",
)
@limiter.limit(settings.rate_limit)
async def get_active_rides(
    request: Request,
    service: RideService = Depends(get_ride_service),
):
    rides = await service.list_active_rides()
    return [RideResponse.model_validate(r) for r in rides]


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
