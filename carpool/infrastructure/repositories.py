"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

``RideRepository`` receives an ``AsyncSession`` (unit-of-work), hands out
immutable ``Ride`` snapshots and accepts new ones only through
``compare_and_swap``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import RideModel
from carpool.domain.entities import Comment, Ride
from carpool.domain.enums import RideStatus, TERMINAL_STATUSES
from carpool.domain.errors import InvalidRideSpec, VersionConflict


class RideRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_ride(
        self,
        *,
        driver_id: str,
        total_seats: int,
        start_location_id: str,
        destination_id: str,
        scheduled_time: datetime,
    ) -> Ride:
        if total_seats < 1:
            raise InvalidRideSpec(
                f"A ride needs at least one seat, got {total_seats}"
            )

        ride = RideModel(
            driver_id=driver_id,
            total_seats=total_seats,
            available_seats=total_seats,
            passengers=[],
            former_passengers=[],
            status=RideStatus.WAITING,
            start_location_id=start_location_id,
            destination_id=destination_id,
            scheduled_time=scheduled_time,
            comments=[],
            version=1,
        )
        self.session.add(ride)
        await self.session.flush()
        # pick up server-side defaults (created_at / updated_at)
        await self.session.refresh(ride)
        return _to_entity(ride)

    async def get_by_id(self, ride_id: int) -> Optional[Ride]:
        ride = await self.session.get(RideModel, ride_id, populate_existing=True)
        return _to_entity(ride) if ride else None

    async def get_active_rides(self) -> list[Ride]:
        result = await self.session.execute(
            select(RideModel)
            .where(RideModel.status.not_in(list(TERMINAL_STATUSES)))
            .order_by(RideModel.scheduled_time, RideModel.id)
        )
        return [_to_entity(r) for r in result.scalars().all()]

    async def compare_and_swap(
        self, ride_id: int, expected_version: int, new_ride: Ride
    ) -> Ride:
        """Store *new_ride* only if the row is still at *expected_version*.

        Columns fixed at creation (driver, seat total, locations, schedule)
        are never written.  Raises ``VersionConflict`` when another writer
        got there first.
        """
        result = await self.session.execute(
            update(RideModel)
            .where(
                RideModel.id == ride_id,
                RideModel.version == expected_version,
            )
            .values(
                available_seats=new_ride.available_seats,
                passengers=list(new_ride.passengers),
                former_passengers=list(new_ride.former_passengers),
                status=new_ride.status,
                comments=[_comment_to_json(c) for c in new_ride.comments],
                version=expected_version + 1,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise VersionConflict(ride_id, expected_version)

        stored = await self.get_by_id(ride_id)
        assert stored is not None
        return stored


# ── Mapping ───────────────────────────────────────────────────────────


def _comment_to_json(comment: Comment) -> dict[str, Any]:
    return {
        "author_id": comment.author_id,
        "like": comment.like,
        "dislike": comment.dislike,
        "text": comment.text,
        "created_at": (
            comment.created_at.isoformat() if comment.created_at else None
        ),
    }


def _comment_from_json(data: dict[str, Any]) -> Comment:
    created_at = data.get("created_at")
    return Comment(
        author_id=data["author_id"],
        like=bool(data.get("like", False)),
        dislike=bool(data.get("dislike", False)),
        text=data.get("text"),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


def _to_entity(model: RideModel) -> Ride:
    return Ride(
        id=model.id,
        driver_id=model.driver_id,
        total_seats=model.total_seats,
        available_seats=model.available_seats,
        passengers=tuple(model.passengers or ()),
        former_passengers=tuple(model.former_passengers or ()),
        status=RideStatus(model.status),
        start_location_id=model.start_location_id,
        destination_id=model.destination_id,
        scheduled_time=model.scheduled_time,
        comments=tuple(_comment_from_json(c) for c in model.comments or ()),
        version=model.version,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
