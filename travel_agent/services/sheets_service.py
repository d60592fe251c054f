"""
Sheets Service - appends finished bookings to a Google Sheet
"""

import asyncio
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from config import GOOGLE_SHEETS_ID, GOOGLE_SERVICE_ACCOUNT_KEY_FILE

logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsService:
    """Google Sheets v4 client; every failure is reported as False"""

    def __init__(self, sheet_id: Optional[str] = GOOGLE_SHEETS_ID, key_file: Optional[str] = GOOGLE_SERVICE_ACCOUNT_KEY_FILE):
        self.sheet_id = sheet_id
        self.key_file = key_file
        self._service = None

    def is_configured(self) -> bool:
        return bool(self.sheet_id and self.key_file and os.path.exists(self.key_file))

    def _get_service(self):
        if self._service is None:
            creds = Credentials.from_service_account_file(self.key_file, scopes=SHEETS_SCOPES)
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        return self._service

    @staticmethod
    def build_row(booking: Dict[str, Any]) -> List[Any]:
        """Sheet columns: timestamp, phone, name, package, destination, start, end, people, price, status, notes"""
        return [
            datetime.utcnow().isoformat(),
            booking.get("customerPhone", ""),
            booking.get("customerName", ""),
            booking.get("package", ""),
            booking.get("destination", ""),
            booking.get("startDate", ""),
            booking.get("endDate", ""),
            booking.get("numberOfPeople", ""),
            booking.get("totalPrice", ""),
            booking.get("status") or "Pending",
            booking.get("notes", ""),
        ]

    def _append(self, row: List[Any]) -> str:
        result = self._get_service().spreadsheets().values().append(
            spreadsheetId=self.sheet_id,
            range="A1",
            valueInputOption="USER_ENTERED",
            body={"values": [row]},
        ).execute()
        return result.get("updates", {}).get("updatedRange", "")

    async def append_booking(self, booking: Dict[str, Any]) -> bool:
        if not self.is_configured():
            logger.warning("Google Sheets not configured - booking not logged")
            return False
        try:
            updated_range = await asyncio.to_thread(self._append, self.build_row(booking))
            logger.info(f"✅ Booking appended to Google Sheets: {updated_range}")
            return True
        except Exception as e:
            logger.error(f"❌ Error appending booking to Google Sheets: {e}", exc_info=True)
            return False
