import logging
import os
from datetime import timedelta

from dotenv import load_dotenv

from schemas import Resource

load_dotenv()

# Bookable resources are enumerated here, not stored
RESOURCES = [
    Resource(id="aircraft1", title="Cessna 172"),
    Resource(id="aircraft2", title="Piper PA-28"),
    Resource(id="aircraft3", title="Diamond DA40"),
]

# One row per hour of the day: "00:00" .. "23:00"
TIMESLOTS = [f"{hour:02d}:00" for hour in range(24)]

DEFAULT_BOOKING_DURATION = timedelta(hours=1)

DEFAULT_LOCALE = os.environ.get("DEFAULT_LOCALE", "en")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
