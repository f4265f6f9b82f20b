"""
Feedback rules: one comment (with an optional like or dislike) per
participant per ride.

Comments are accepted in every ride status.  The driver may always
comment; a passenger may comment once they have held a seat, even if
they later cancelled it.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from .entities import Comment, Ride
from .enums import FailureKind
from .failures import Outcome, RideFailure


def add_comment(
    ride: Ride,
    author_id: str,
    like: bool = False,
    dislike: bool = False,
    text: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Outcome:
    if not ride.is_participant(author_id):
        return RideFailure(
            FailureKind.NOT_PARTICIPANT,
            f"User {author_id} did not take part in this ride",
        )
    if like and dislike:
        return RideFailure(
            FailureKind.INVALID_RATING, "A comment cannot both like and dislike a ride"
        )
    if ride.has_commented(author_id):
        return RideFailure(
            FailureKind.DUPLICATE_COMMENT,
            f"User {author_id} already commented on this ride",
        )

    comment = Comment(
        author_id=author_id,
        like=like,
        dislike=dislike,
        text=text,
        created_at=now or datetime.now(timezone.utc),
    )
    return replace(ride, comments=ride.comments + (comment,))
