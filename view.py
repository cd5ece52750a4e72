"""Calendar view state: the viewed day, its bookings and the open draft."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Sequence

from pydantic import ValidationError

from availability import (
    PAST,
    Draft,
    build_grid,
    classify_cell,
    draft_for_slot,
    find_booking,
    slot_instant,
)
from client import BookingsClient, GatewayError
from config import RESOURCES, TIMESLOTS
from schemas import BookingRead, Resource, TimeslotRow

logger = logging.getLogger(__name__)

PAST_SLOT_MESSAGE = "Cannot book a time in the past."


def _log_alert(message: str) -> None:
    logger.warning(message)


class CalendarView:
    """Drives create/edit/delete through a ``BookingsClient``.

    Every successful mutation is followed by a full re-fetch of the day.
    Failed requests are logged and leave the state as it was.
    """

    def __init__(
        self,
        client: BookingsClient,
        resources: Sequence[Resource] = RESOURCES,
        timeslots: Sequence[str] = TIMESLOTS,
        current_date: date | None = None,
        clock: Callable[[], datetime] = datetime.now,
        alert: Callable[[str], None] = _log_alert,
    ) -> None:
        self.client = client
        self.resources = list(resources)
        self.timeslots = list(timeslots)
        self.clock = clock
        self.alert = alert
        self.current_date = current_date or clock().date()
        self.bookings: list[BookingRead] = []
        self.draft: Draft | None = None

    async def refresh(self) -> None:
        try:
            self.bookings = await self.client.list(day=self.current_date)
        except GatewayError as exc:
            logger.error("Error fetching bookings: %s", exc)

    def grid(self) -> list[TimeslotRow]:
        return build_grid(self.bookings, self.resources, self.timeslots, self.current_date, self.clock())

    def status(self, resource_id: str, time_label: str) -> str:
        instant = slot_instant(self.current_date, time_label)
        return classify_cell(self.bookings, resource_id, instant, self.clock())

    def click_cell(self, resource_id: str, time_label: str) -> Draft | None:
        instant = slot_instant(self.current_date, time_label)
        booking = find_booking(self.bookings, resource_id, instant)
        if booking is not None:
            return self.click_booking(booking)

        if classify_cell(self.bookings, resource_id, instant, self.clock()) == PAST:
            self.alert(PAST_SLOT_MESSAGE)
            return None

        self.draft = draft_for_slot(resource_id, instant)
        return self.draft

    def click_booking(self, booking: BookingRead) -> Draft:
        self.draft = Draft.from_booking(booking)
        return self.draft

    def set_title(self, title: str) -> None:
        if self.draft is not None:
            self.draft.title = title

    def set_times(self, start: datetime | str, end: datetime | str) -> None:
        """Change the draft interval; accepts datetimes or "YYYY-MM-DDTHH:MM" strings.

        The draft is left as it was when either value does not parse.
        ``start < end`` is not checked here.
        """
        if self.draft is None:
            return
        try:
            edited = self.draft.model_copy()
            edited.start_date_time = start
            edited.end_date_time = end
        except ValidationError as exc:
            logger.error("Invalid booking times: %s", exc)
            return
        self.draft = edited

    async def submit(self) -> bool:
        draft = self.draft
        if draft is None or not draft.title:
            logger.error("Booking data is incomplete.")
            return False

        try:
            if draft.id is None:
                await self.client.create(draft)
            else:
                await self.client.update(draft)
        except GatewayError as exc:
            logger.error("Error submitting booking: %s", exc)
            return False

        await self.refresh()
        self.draft = None
        return True

    async def delete(self) -> bool:
        draft = self.draft
        if draft is None or draft.id is None:
            return False

        try:
            await self.client.delete(draft.id)
        except GatewayError as exc:
            logger.error("Error deleting booking: %s", exc)
            return False

        await self.refresh()
        self.draft = None
        return True

    async def navigate(self, direction: str) -> None:
        if direction not in ("prev", "next"):
            raise ValueError(f"Unknown direction: {direction!r}")
        step = timedelta(hours=-24 if direction == "prev" else 24)
        self.current_date = self.current_date + step
        await self.refresh()
