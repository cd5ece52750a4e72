"""HTTP client for the locale-prefixed bookings endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx
from pydantic import ValidationError

from availability import Draft
from config import DEFAULT_LOCALE
from schemas import BookingRead

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised when the bookings endpoint fails or answers with an unusable body."""


class BookingsClient:
    """Calls ``/{locale}/api/bookings`` with the locale fixed at construction."""

    def __init__(
        self,
        base_url: str,
        locale: str = DEFAULT_LOCALE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.locale = locale
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport)

    @property
    def path(self) -> str:
        return f"/{self.locale}/api/bookings"

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list(self, day: date | None = None, resource_id: str | None = None) -> list[BookingRead]:
        params: dict[str, str] = {}
        if day is not None:
            params["date"] = day.isoformat()
        if resource_id:
            params["resourceId"] = resource_id
        fallback = "Failed to fetch bookings"
        data = await self._call("GET", params=params, fallback=fallback)
        return self._parse_many(data, fallback)

    async def create(self, draft: Draft) -> BookingRead:
        fallback = "Failed to create booking"
        data = await self._call("POST", json=draft.payload(), fallback=fallback)
        try:
            return BookingRead.model_validate(data)
        except ValidationError as exc:
            raise GatewayError(f"{fallback}: unexpected response body") from exc

    async def update(self, draft: Draft) -> list[BookingRead]:
        fallback = "Failed to update booking"
        data = await self._call("PUT", json=draft.payload(), fallback=fallback)
        return self._parse_many(data, fallback)

    async def delete(self, booking_id: int) -> list[BookingRead]:
        fallback = "Failed to delete booking"
        data = await self._call("DELETE", json={"id": booking_id}, fallback=fallback)
        return self._parse_many(data, fallback)

    @staticmethod
    def _parse_many(data: Any, fallback: str) -> list[BookingRead]:
        if not isinstance(data, list):
            raise GatewayError(f"{fallback}: expected a list of bookings")
        try:
            return [BookingRead.model_validate(item) for item in data]
        except ValidationError as exc:
            raise GatewayError(f"{fallback}: unexpected response body") from exc

    async def _call(self, method: str, *, fallback: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, self.path, **kwargs)
        except httpx.HTTPError as exc:
            raise GatewayError(f"{fallback}: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise GatewayError(message or fallback)
        return data
