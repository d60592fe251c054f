"""
Backend Client - customer lookup and vendor/booking email endpoints
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from config import BACKEND_URL
from ..config.settings import RETRY_SETTINGS
from ..utils.errors import BackendError
from ..utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class BackendClient:
    """Async HTTP client for the agency backend.

    No method raises: lookups and single posts return None on failure,
    retried posts return None once every attempt failed.
    """

    def __init__(self, base_url: str = BACKEND_URL, sleep=asyncio.sleep):
        self.base_url = (base_url or "").rstrip("/")
        self._sleep = sleep
        logger.info(f"✅ BackendClient initialized for {self.base_url}")

    async def _request(self, method: str, path: str, timeout: float, **kwargs) -> Any:
        """Perform a request; non-2xx responses and network errors raise BackendError"""
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(
                    method,
                    url,
                    timeout=aiohttp.ClientTimeout(total=timeout),
                    **kwargs
                ) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise BackendError(f"{method} {path} -> HTTP {response.status}: {body[:200]}")
                    return await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise BackendError(f"{method} {path} timed out after {timeout}s")
        except aiohttp.ClientError as e:
            raise BackendError(f"{method} {path} failed: {e}")
        except ValueError as e:
            raise BackendError(f"{method} {path} returned invalid JSON: {e}")

    async def _post_once(self, path: str, payload: Dict[str, Any]) -> Optional[Any]:
        try:
            return await self._request("POST", path, RETRY_SETTINGS["default_timeout"], json=payload)
        except BackendError as e:
            logger.error(f"❌ Backend call failed: {e}")
            return None

    async def _post_with_retry(self, path: str, payload: Dict[str, Any], operation: str) -> Optional[Any]:
        settings = RETRY_SETTINGS[operation]

        async def attempt():
            return await self._request("POST", path, settings["timeout"], json=payload)

        return await retry_with_backoff(
            attempt,
            max_attempts=settings["max_attempts"],
            base_delay=settings["base_delay"],
            max_delay=settings["max_delay"],
            label=operation.replace("_", " "),
            sleep=self._sleep,
        )

    # ==================== Endpoints ====================

    async def get_customer_data(self, phone: str) -> Optional[List[Dict[str, Any]]]:
        """Customers registered on the website with this phone, None if unavailable"""
        try:
            data = await self._request(
                "GET", "/api/customers/", RETRY_SETTINGS["default_timeout"], params={"phone": phone}
            )
        except BackendError as e:
            logger.warning(f"Backend not available - customer lookup skipped: {e}")
            return None
        return data if isinstance(data, list) else None

    async def send_vendor_email(self, inquiry: Dict[str, Any]) -> Optional[Any]:
        return await self._post_once("/api/send-vendor-email/", inquiry)

    # Backend API surface; the chat flow itself only dispatches day-wise emails
    async def send_booking_email(self, booking: Dict[str, Any]) -> Optional[Any]:
        return await self._post_with_retry("/api/send-booking-email/", booking, "booking_email")

    async def send_daywise_booking_email(self, booking: Dict[str, Any]) -> Optional[Any]:
        return await self._post_with_retry("/api/send-daywise-booking-emails/", booking, "daywise_booking_email")

    async def create_booking(self, booking: Dict[str, Any]) -> Optional[Any]:
        return await self._post_once("/api/bookings/", booking)

    @staticmethod
    def registered_name(customer_data: Optional[List[Dict[str, Any]]]) -> Optional[str]:
        """Name of the first registered customer record"""
        if not customer_data:
            return None
        first = customer_data[0]
        if isinstance(first, dict):
            return first.get("name") or None
        return None
