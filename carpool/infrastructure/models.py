"""
SQLAlchemy ORM models.

Tables
------
* ``rides`` -- one row per ride; passengers and comments are kept as JSON
  on the row so that a single conditional UPDATE replaces the whole
  aggregate.

Indexes
-------
* **B-Tree** on ``status``, ``driver_id`` and ``scheduled_time`` for the
  active-ride listing and per-driver look-ups.
"""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Index,
    Integer,
    String,
    func,
)

from .database import Base
from carpool.domain.enums import RideStatus


class RideModel(Base):
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(String(64), nullable=False)

    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    passengers = Column(JSON, nullable=False, default=list)
    former_passengers = Column(JSON, nullable=False, default=list)

    status = Column(Enum(RideStatus), default=RideStatus.WAITING, nullable=False)
    start_location_id = Column(String(64), nullable=False)
    destination_id = Column(String(64), nullable=False)
    scheduled_time = Column(DateTime(timezone=True), nullable=False)

    # [{"author_id", "like", "dislike", "text", "created_at"}, ...]
    comments = Column(JSON, nullable=False, default=list)

    version = Column(Integer, default=1, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("available_seats >= 0", name="ck_rides_seats_nonneg"),
        CheckConstraint("total_seats >= 1", name="ck_rides_total_seats"),
        Index("idx_rides_status", "status"),
        Index("idx_rides_driver", "driver_id"),
        Index("idx_rides_scheduled", "scheduled_time"),
    )
