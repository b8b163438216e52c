"""
REST client for the admin endpoints of the booking backend.

Blocking `requests` calls are exposed as coroutines through
`asyncio.to_thread`, so the dashboard can gather independent fetches.
Every failure is raised as ApiError; callers decide what the operator sees.
"""
import asyncio
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from app.core.config import settings
from app.core.logger import logger
from app.models.api_models import CurrentUser, DecisionAction, DecisionRequest
from app.models.dashboard_models import Booking, RestrictionsRecord


class ApiError(Exception):
    """Any failed backend call: transport error, non-2xx status or bad payload."""

    def __init__(self, method: str, path: str, status_code: Optional[int] = None, detail: str = ""):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.detail = detail
        status = f" -> {status_code}" if status_code is not None else ""
        super().__init__(f"{method} {path}{status}: {detail}" if detail else f"{method} {path}{status}")


class AdminApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.token = token if token is not None else settings.API_TOKEN
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"➡️ {method} {url}")

        try:
            response = self._session.request(
                method, url, json=payload, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"❌ API request failed: {method} {path} -> {e}")
            raise ApiError(method, path, detail=str(e)) from e

        if response.status_code >= 400:
            logger.error(f"❌ API error: {method} {path} -> {response.status_code}")
            raise ApiError(method, path, response.status_code, response.text[:200])

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"❌ API returned invalid JSON: {method} {path}")
            raise ApiError(method, path, response.status_code, "invalid JSON") from e

    # ------------------------------------------------------------------
    # Blocking calls
    # ------------------------------------------------------------------

    def fetch_current_user(self) -> CurrentUser:
        """GET /auth/me"""
        data = self._request("GET", "/auth/me")
        try:
            return CurrentUser.model_validate(data)
        except ValidationError as e:
            raise ApiError("GET", "/auth/me", detail=str(e)) from e

    def fetch_bookings(self) -> List[Booking]:
        """GET /admin/bookings — whole collection, server order kept."""
        data = self._request("GET", "/admin/bookings")
        if not isinstance(data, list):
            raise ApiError("GET", "/admin/bookings", detail="expected a list of bookings")
        try:
            bookings = [Booking.model_validate(item) for item in data]
        except ValidationError as e:
            raise ApiError("GET", "/admin/bookings", detail=str(e)) from e
        logger.info(f"📋 Loaded {len(bookings)} bookings")
        return bookings

    def decide_booking(self, booking_id: str, action: DecisionAction, admin_notes: str = "") -> None:
        """PUT /admin/bookings/{id} — response body is ignored, the list is re-fetched."""
        body = DecisionRequest(action=action, admin_notes=admin_notes)
        self._request("PUT", f"/admin/bookings/{booking_id}", payload=body.model_dump())
        logger.info(f"✅ Booking {booking_id}: {action}")

    def fetch_restrictions(self) -> RestrictionsRecord:
        """GET /covid/restrictions"""
        data = self._request("GET", "/covid/restrictions")
        try:
            return RestrictionsRecord.model_validate(data)
        except ValidationError as e:
            raise ApiError("GET", "/covid/restrictions", detail=str(e)) from e

    def replace_restrictions(self, record: RestrictionsRecord) -> None:
        """PUT /admin/covid/restrictions — full overwrite."""
        self._request("PUT", "/admin/covid/restrictions", payload=record.model_dump())
        logger.info(f"🦠 Restrictions replaced (level={record.level})")

    # ------------------------------------------------------------------
    # Async wrappers
    # ------------------------------------------------------------------

    async def get_current_user(self) -> CurrentUser:
        return await asyncio.to_thread(self.fetch_current_user)

    async def get_bookings(self) -> List[Booking]:
        return await asyncio.to_thread(self.fetch_bookings)

    async def decide(self, booking_id: str, action: DecisionAction, admin_notes: str = "") -> None:
        await asyncio.to_thread(self.decide_booking, booking_id, action, admin_notes)

    async def get_restrictions(self) -> RestrictionsRecord:
        return await asyncio.to_thread(self.fetch_restrictions)

    async def put_restrictions(self, record: RestrictionsRecord) -> None:
        await asyncio.to_thread(self.replace_restrictions, record)
