"""Slot occupancy for the day/resource grid.

A cell is a (resource, time of day) pair on the viewed date. Each cell is
exactly one of ``booked``, ``past`` or ``available``. The current time is
always passed in by the caller.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, NaiveDatetime

from config import DEFAULT_BOOKING_DURATION
from schemas import BookingRead, CellStatus, Resource, TimeslotRow

BOOKED = "booked"
PAST = "past"
AVAILABLE = "available"


class Draft(BaseModel):
    """A booking being edited in the view; ``id`` is None until persisted."""

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[int] = None
    resource_id: str
    start_date_time: NaiveDatetime
    end_date_time: NaiveDatetime
    title: str = ""

    @classmethod
    def from_booking(cls, booking: BookingRead) -> "Draft":
        return cls(**booking.model_dump())

    def payload(self) -> dict:
        body = {
            "resourceId": self.resource_id,
            "startDateTime": self.start_date_time.strftime("%Y-%m-%dT%H:%M"),
            "endDateTime": self.end_date_time.strftime("%Y-%m-%dT%H:%M"),
            "title": self.title,
        }
        if self.id is not None:
            body["id"] = self.id
        return body


def slot_instant(day: date, time_label: str) -> datetime:
    """Local datetime of ``time_label`` ("HH:MM") on ``day``."""
    hour, minute = (int(part) for part in time_label.split(":"))
    return datetime(day.year, day.month, day.day, hour, minute)


def find_booking(bookings: Iterable, resource_id: str, instant: datetime):
    # Half-open [start, end): a slot at the booking's start is covered,
    # a slot at its end is not.
    for booking in bookings:
        if (
            booking.resource_id == resource_id
            and booking.start_date_time <= instant < booking.end_date_time
        ):
            return booking
    return None


def classify_cell(bookings: Iterable, resource_id: str, instant: datetime, now: datetime) -> str:
    if find_booking(bookings, resource_id, instant) is not None:
        return BOOKED
    if instant < now:
        return PAST
    return AVAILABLE


def build_grid(
    bookings: Sequence,
    resources: Sequence[Resource],
    timeslots: Sequence[str],
    day: date,
    now: datetime,
) -> List[TimeslotRow]:
    rows = []
    for label in timeslots:
        instant = slot_instant(day, label)
        cells = []
        for resource in resources:
            booking = find_booking(bookings, resource.id, instant)
            if booking is not None:
                cell = CellStatus(
                    resource_id=resource.id,
                    status=BOOKED,
                    title=booking.title,
                    booking_id=booking.id,
                )
            else:
                cell = CellStatus(
                    resource_id=resource.id,
                    status=PAST if instant < now else AVAILABLE,
                )
            cells.append(cell)
        rows.append(TimeslotRow(time_label=label, cells=cells))
    return rows


def draft_for_slot(
    resource_id: str,
    instant: datetime,
    duration: timedelta = DEFAULT_BOOKING_DURATION,
) -> Draft:
    return Draft(
        resource_id=resource_id,
        start_date_time=instant,
        end_date_time=instant + duration,
    )
