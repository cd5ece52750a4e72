from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime
from pydantic.alias_generators import to_camel


# Pydantic Schemas for Request/Response (camelCase on the wire)
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Resource(CamelModel):
    id: str
    title: str


class BookingFields(CamelModel):
    resource_id: str
    start_date_time: NaiveDatetime
    end_date_time: NaiveDatetime
    title: str = Field(min_length=1)


class BookingCreate(BookingFields):
    pass


class BookingUpdate(BookingFields):
    id: int


class BookingDelete(CamelModel):
    id: int


class BookingRead(BookingFields):
    id: int


class CellStatus(CamelModel):
    resource_id: str
    status: str
    title: Optional[str] = None
    booking_id: Optional[int] = None


class TimeslotRow(CamelModel):
    time_label: str
    cells: list[CellStatus]
