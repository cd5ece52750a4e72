from typing import Optional
from pydantic import NaiveDatetime
from sqlmodel import SQLModel, Field


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    # No uniqueness or overlap constraint: overlapping bookings for the
    # same resource are accepted by the store.
    id: Optional[int] = Field(default=None, primary_key=True)
    resource_id: str = Field(index=True)
    # Local wall-clock times, stored without a timezone
    start_date_time: NaiveDatetime = Field(index=True)
    end_date_time: NaiveDatetime
    title: str
