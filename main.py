import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import FastAPI, Depends, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from availability import build_grid
from config import CORS_ORIGINS, RESOURCES, TIMESLOTS, configure_logging
from database import close_db, get_session, init_db
from schemas import (
    BookingCreate,
    BookingDelete,
    BookingRead,
    BookingUpdate,
    Resource,
    TimeslotRow,
)
from store import BookingStore, StoreError

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Resource Booking Calendar")


def error_response(message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
    return JSONResponse({"error": message}, status_code=status_code)


def get_store(session: AsyncSession = Depends(get_session)) -> BookingStore:
    return BookingStore(session)


@app.on_event("startup")
async def on_startup():
    await init_db()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return error_response(exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.warning("Rejected request to %s: %s", request.url.path, problems)
    return error_response(problems, status.HTTP_422_UNPROCESSABLE_ENTITY)


# --- GET /{locale}/api/bookings ---
@app.get("/{locale}/api/bookings", response_model=List[BookingRead])
async def list_bookings(
    locale: str,
    resource_id: Optional[str] = Query(None, alias="resourceId"),
    target_date: Optional[date] = Query(None, alias="date"),
    store: BookingStore = Depends(get_store),
):
    logger.info("Locale for GET request: %s", locale)
    try:
        return await store.list(resource_id=resource_id, day=target_date)
    except StoreError:
        raise
    except Exception:
        logger.exception("Unexpected error in GET")
        return error_response("Failed to fetch bookings")


# --- POST /{locale}/api/bookings ---
@app.post(
    "/{locale}/api/bookings",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    locale: str,
    booking_data: BookingCreate,
    store: BookingStore = Depends(get_store),
):
    logger.info("Locale for POST request: %s", locale)
    try:
        return await store.create(booking_data)
    except StoreError:
        raise
    except Exception:
        logger.exception("Unexpected error in POST")
        return error_response("Failed to create booking")


# --- PUT /{locale}/api/bookings ---
@app.put("/{locale}/api/bookings", response_model=List[BookingRead])
async def update_booking(
    locale: str,
    booking_data: BookingUpdate,
    store: BookingStore = Depends(get_store),
):
    logger.info("Locale for PUT request: %s", locale)
    try:
        return await store.update(booking_data.id, booking_data)
    except StoreError:
        raise
    except Exception:
        logger.exception("Unexpected error in PUT")
        return error_response("Failed to update booking")


# --- DELETE /{locale}/api/bookings ---
@app.delete("/{locale}/api/bookings", response_model=List[BookingRead])
async def delete_booking(
    locale: str,
    booking_data: BookingDelete,
    store: BookingStore = Depends(get_store),
):
    logger.info("Locale for DELETE request: %s", locale)
    try:
        return await store.delete(booking_data.id)
    except StoreError:
        raise
    except Exception:
        logger.exception("Unexpected error in DELETE")
        return error_response("Failed to delete booking")


# --- GET /{locale}/api/resources ---
@app.get("/{locale}/api/resources", response_model=List[Resource])
async def list_resources(locale: str):
    return RESOURCES


# --- GET /{locale}/api/calendar ---
@app.get("/{locale}/api/calendar", response_model=List[TimeslotRow])
async def get_calendar(
    locale: str,
    target_date: date = Query(..., alias="date"),
    store: BookingStore = Depends(get_store),
):
    # Single query for the day, then the grid is built in memory
    logger.info("Locale for calendar request: %s", locale)
    bookings = await store.list(day=target_date)
    return build_grid(bookings, RESOURCES, TIMESLOTS, target_date, datetime.now())


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
