"""
Message Intents Enum
"""

from enum import Enum


class Intent(Enum):
    """Classified purpose of an inbound WhatsApp message"""

    GREETING = "greeting"
    PRICE_INQUIRY = "price_inquiry"
    FINALIZE = "finalize"
    BOOK_TRIP = "book_trip"
    BOOK_TRIP_NOW = "book_trip_now"
    TRAVEL_DOCUMENT_QUESTION = "travel_document_question"
    PACKAGE_QUESTION = "package_question"
    BOOKING_INFO = "booking_info"
    FALLBACK = "fallback"
