"""FastAPI dependency injection helpers."""

from typing import Optional

from fastapi import Header, HTTPException

from carpool.infrastructure.database import async_session_factory
from carpool.services.rides import RideService


def get_ride_service() -> RideService:
    """Service bound to the application's session factory."""
    return RideService(async_session_factory)


async def get_caller_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Identity of the caller, as asserted by the upstream auth gateway."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id
