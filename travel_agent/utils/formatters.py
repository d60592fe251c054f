"""
Message formatting utilities
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from config import COMPANY_NAME
from ..config.settings import AGENT_SETTINGS
from ..models.booking import BookingState
from ..models.transcript import QuoteRecord, VendorQuote
from .helpers import truncate


class Formatters:
    """Composed WhatsApp messages"""

    @staticmethod
    def format_booking_summary(booking: BookingState) -> str:
        return (
            "📋 **BOOKING SUMMARY**\n\n"
            f"👤 Name: {booking.customer_name}\n"
            f"📅 Start Date: {booking.start_date}\n"
            f"📅 End Date: {booking.end_date}\n"
            f"👥 Travelers: {booking.number_of_people}\n\n"
            "✅ All details collected!\n\n"
            "Please send **\"finalize\"** to get quotes from our vendors."
        )

    @staticmethod
    def format_executive_message(
        phone: str,
        booking: BookingState,
        conversation_summary: str,
        quotes: Optional[List[VendorQuote]] = None,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """Hand-off message for the executive's WhatsApp"""
        timestamp = timestamp or datetime.now()

        message = "🚨 NEW BOOKING REQUEST\n"
        message += f"⏰ Time: {timestamp.strftime('%d/%m/%Y, %H:%M:%S')}\n\n"
        message += "👤 CUSTOMER DETAILS:\n"
        message += f"📱 Phone: {phone}\n"
        if booking.customer_name:
            message += f"👤 Name: {booking.customer_name}\n"
        if booking.email:
            message += f"📧 Email: {booking.email}\n"

        message += "\n🎯 TRIP DETAILS:\n"
        if booking.package:
            message += f"📦 Package: {booking.package}\n"
        if booking.destination:
            message += f"📍 Destination: {booking.destination}\n"
        if booking.number_of_people:
            message += f"👥 Travelers: {booking.number_of_people} person(s)\n"
        if booking.start_date:
            dates = booking.start_date
            if booking.end_date:
                dates += f" to {booking.end_date}"
            message += f"📅 Dates: {dates}\n"
        if booking.total_price:
            message += f"💰 Budget: {booking.total_price}\n"
        if booking.preferences:
            message += f"🌍 Preferences: {booking.preferences}\n"

        if quotes:
            message += "\n💰 VENDOR QUOTES RECEIVED:\n"
            for index, quote in enumerate(quotes, 1):
                message += f"{index}. {quote.vendor_name}: ${quote.final_price}\n"
                if quote.quote_details:
                    message += f"   Details: {truncate(quote.quote_details, 100)}\n"

        limit = AGENT_SETTINGS["conversation_summary_chars"]
        message += "\n💬 CONVERSATION SUMMARY:\n"
        message += f"{truncate(conversation_summary, limit)}\n\n"
        message += "⚡ ACTION REQUIRED: Please contact this customer to finalize booking details and payment."

        return message

    @staticmethod
    def format_quote_message(customer_name: str, record: QuoteRecord) -> str:
        """Vendor quotes as sent to the customer"""
        message = f"💰 All Vendor Quotes Received!\n\nHello {customer_name}!\n\n"
        if record.destination:
            message += f"📍 Destination: {record.destination}\n"
        if record.service_type:
            message += f"🏷️ Service: {record.service_type}\n"
        message += "\n"

        for index, quote in enumerate(record.quotes, 1):
            message += f"**{index}. {quote.vendor_name}**\n"
            message += f"💵 Price: ${quote.final_price}\n"
            if quote.quote_details:
                message += f"📝 Details: {quote.quote_details}\n"
            if quote.validity_date:
                message += f"⏰ Valid until: {quote.validity_date}\n"
            message += "\n"

        message += (
            "Please reply with the vendor number (1, 2, etc.) to select a quote, or ask for more details!\n"
            "Send **\"book my trip now\"** to have our executive confirm it with you."
        )
        return message

    @staticmethod
    def format_customer_update(customer_name: str, update_type: str, update_data: Optional[Dict[str, Any]]) -> str:
        update_data = update_data or {}
        if update_type == 'profile_updated':
            return f"Hello {customer_name}! Your profile has been updated successfully. 🌟"
        if update_type == 'booking_confirmed':
            details = update_data.get('details') or 'Please check your booking details.'
            return f"Hello {customer_name}! Your booking has been confirmed! 🎉\n\n{details}"
        if update_type == 'payment_received':
            details = update_data.get('details') or 'Thank you for your payment!'
            return f"Hello {customer_name}! Payment received successfully. 💳\n\n{details}"
        if update_type == 'inquiry_response':
            details = update_data.get('message') or 'Please check your inquiry details.'
            return f"Hello {customer_name}! You have a new response to your inquiry. 📧\n\n{details}"
        return f"Hello {customer_name}! Your account has been updated. 📋"

    @staticmethod
    def format_booking_confirmation(customer_name: str, travel_date: str, guests: Any) -> str:
        message = f"🎉 Booking Confirmed!\n\nHello {customer_name}!\n\n"
        message += f"Your booking for Bali Explorer on {travel_date} for {guests} guest(s) has been confirmed.\n\n"
        message += f"Thank you for choosing {COMPANY_NAME}! 🌍✨\n\n"
        message += "Great! Send 'finalize' to get prices and check availability. 💰"
        return message

    @staticmethod
    def format_inquiry_response(customer_name: str, vendor_name: str, response_details: str) -> str:
        return (
            f"📧 New Inquiry Response\n\nHello {customer_name}!\n\n"
            f"{vendor_name} has responded to your inquiry:\n\n{response_details}\n\n"
            "Please reply to this message or contact us for more details."
        )
