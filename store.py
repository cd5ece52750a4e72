"""Booking store gateway: list, create, update and delete over the ``bookings`` table."""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlmodel import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models import Booking
from schemas import BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the backing store fails a query or a write."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class BookingStore:
    """Gateway over a single request-scoped session.

    Every call is one unit of work against the store. Failures are rolled
    back and re-raised as ``StoreError``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(
        self, resource_id: Optional[str] = None, day: Optional[date] = None
    ) -> List[Booking]:
        statement = select(Booking)
        if resource_id:
            statement = statement.where(Booking.resource_id == resource_id)
        if day is not None:
            # Anything intersecting the day, including bookings spanning midnight
            day_start, day_end = day_bounds(day)
            statement = statement.where(
                Booking.start_date_time < day_end, Booking.end_date_time > day_start
            )
        statement = statement.order_by(Booking.start_date_time, Booking.id)

        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as exc:
            raise await self._fail("Error fetching bookings", exc)
        return list(result.scalars().all())

    async def create(self, data: BookingCreate) -> Booking:
        booking = Booking(
            resource_id=data.resource_id,
            start_date_time=data.start_date_time,
            end_date_time=data.end_date_time,
            title=data.title,
        )
        try:
            self.session.add(booking)
            await self.session.commit()
            await self.session.refresh(booking)
        except SQLAlchemyError as exc:
            raise await self._fail("Error creating booking", exc)
        return booking

    async def update(self, booking_id: int, data: BookingUpdate) -> List[Booking]:
        try:
            booking = await self.session.get(Booking, booking_id)
            if booking is None:
                return []
            booking.resource_id = data.resource_id
            booking.start_date_time = data.start_date_time
            booking.end_date_time = data.end_date_time
            booking.title = data.title
            self.session.add(booking)
            await self.session.commit()
            await self.session.refresh(booking)
        except SQLAlchemyError as exc:
            raise await self._fail("Error updating booking", exc)
        return [booking]

    async def delete(self, booking_id: int) -> List[Booking]:
        try:
            booking = await self.session.get(Booking, booking_id)
            if booking is None:
                return []
            await self.session.delete(booking)
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise await self._fail("Error deleting booking", exc)
        return [booking]

    async def _fail(self, context: str, exc: SQLAlchemyError) -> StoreError:
        await self.session.rollback()
        message = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)
        logger.error("%s: %s", context, message)
        return StoreError(message)
