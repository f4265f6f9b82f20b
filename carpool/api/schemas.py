"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from carpool.domain.enums import RideStatus


# ── Requests ──────────────────────────────────────────────────────────


class RideCreateRequest(BaseModel):
    total_seats: int = Field(..., ge=1, le=8)
    start_location_id: str = Field(..., min_length=1, max_length=64)
    destination_id: str = Field(..., min_length=1, max_length=64)
    scheduled_time: datetime


class StatusChangeRequest(BaseModel):
    status: RideStatus


class CommentCreateRequest(BaseModel):
    like: bool = False
    dislike: bool = False
    text: Optional[str] = Field(None, max_length=500)


# ── Responses ─────────────────────────────────────────────────────────


class CommentResponse(BaseModel):
    author_id: str
    like: bool
    dislike: bool
    text: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RideResponse(BaseModel):
    id: int
    driver_id: str
    total_seats: int
    available_seats: int
    passengers: list[str]
    status: RideStatus
    ride_finished: bool
    start_location_id: str
    destination_id: str
    scheduled_time: datetime
    comments: list[CommentResponse] = []
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
    code: str
