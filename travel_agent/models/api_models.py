"""
API Request/Response Models
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .transcript import VendorQuote


class InboundMessage(BaseModel):
    """Text message received from the WhatsApp transport"""

    sender_id: str
    body: str
    timestamp: Optional[str] = None
    message_id: Optional[str] = None


class VendorQuotePayload(BaseModel):
    """Vendor quotes pushed by the backend"""

    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    destination: Optional[str] = None
    service_type: Optional[str] = None
    quotes: List[VendorQuote]
    quote_request_id: Optional[Any] = None

    @field_validator('customer_phone', mode='before')
    @classmethod
    def phone_as_string(cls, v):
        return str(v) if v is not None else v

    @field_validator('quotes')
    @classmethod
    def quotes_not_empty(cls, v):
        if not v:
            raise ValueError("No quotes provided")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "Pratham Rathore",
                "customer_phone": "919876543210",
                "destination": "Bali",
                "service_type": "Package Tour",
                "quotes": [
                    {"vendor_name": "Island Tours", "final_price": 1200,
                     "quote_details": "5 nights, breakfast included", "validity_date": "2026-06-01"}
                ],
                "quote_request_id": 17
            }
        }


class CustomerUpdatePayload(BaseModel):
    customer_phone: str
    customer_name: str = ""
    update_type: str = ""
    update_data: Optional[Dict[str, Any]] = None

    @field_validator('customer_phone', mode='before')
    @classmethod
    def phone_as_string(cls, v):
        return str(v) if v is not None else v


class BookingConfirmationPayload(BaseModel):
    """Accepts both customer_phone/customer_name and phone/name field names"""

    customer_phone: Optional[str] = None
    phone: Optional[str] = None
    customer_name: Optional[str] = None
    name: Optional[str] = None
    travel_date: Optional[str] = ""
    guests: Optional[Any] = ""

    @field_validator('customer_phone', 'phone', mode='before')
    @classmethod
    def phone_as_string(cls, v):
        return str(v) if v is not None else v

    @property
    def resolved_phone(self) -> Optional[str]:
        return self.customer_phone or self.phone

    @property
    def resolved_name(self) -> Optional[str]:
        return self.customer_name or self.name


class InquiryResponsePayload(BaseModel):
    customer_phone: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    vendor_name: str = Field(..., min_length=1)
    response_details: str = Field(..., min_length=1)

    @field_validator('customer_phone', mode='before')
    @classmethod
    def phone_as_string(cls, v):
        return str(v) if v is not None else v


class WebhookAck(BaseModel):
    success: bool = True
    message: str = ""
