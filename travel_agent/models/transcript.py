"""
Transcript and quote models
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranscriptEntry(BaseModel):
    """One persisted chat line, stored as {timestamp, message, isBot}"""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
    message: str
    is_bot: bool = Field(default=False, alias="isBot")

    @property
    def speaker(self) -> str:
        return "Bot" if self.is_bot else "User"

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class VendorQuote(BaseModel):
    """A single vendor price, as pushed by the backend"""

    vendor_name: str = ""
    final_price: Any = None
    quote_details: Optional[str] = None
    validity_date: Optional[str] = None


class QuoteRecord(BaseModel):
    """Vendor quotes stored per user; the latest one is used by booking commands"""

    destination: Optional[str] = None
    service_type: Optional[str] = None
    quotes: List[VendorQuote] = Field(default_factory=list)
    quote_request_id: Optional[Any] = None
    received_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
