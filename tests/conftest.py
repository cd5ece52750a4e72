"""Test configuration and fixtures."""

import os
import tempfile

# Set environment variables BEFORE importing the app
_db_dir = tempfile.mkdtemp(prefix="bookings-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"

import httpx
import pytest
import pytest_asyncio

from client import BookingsClient
from database import close_db, drop_db, init_db
from main import app

BASE_URL = "http://test"


@pytest_asyncio.fixture
async def db():
    """Fresh tables for each test."""
    await init_db()
    yield
    await drop_db()
    await close_db()


@pytest_asyncio.fixture
async def api(db):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client


@pytest_asyncio.fixture
async def bookings_client(db):
    client = BookingsClient(BASE_URL, locale="en", transport=httpx.ASGITransport(app=app))
    yield client
    await client.aclose()


@pytest.fixture
def booking_payload():
    return {
        "resourceId": "aircraft1",
        "startDateTime": "2024-01-01T10:00",
        "endDateTime": "2024-01-01T11:00",
        "title": "Pattern work",
    }
