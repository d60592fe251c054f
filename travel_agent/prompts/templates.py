"""
Prompt Templates - fixed customer messages and provider prompts
"""

from typing import Dict, Optional

from config import COMPANY_NAME
from ..models.booking import BookingState

# ==================== FIXED MESSAGES ====================

NAME_PROMPT = "👋 Hello! Can I have your full name for the booking?"
START_DATE_PROMPT = (
    "Hi {name}! When would you like your trip to start? "
    "(Please provide date in DD/MM/YYYY format)"
)
PEOPLE_PROMPT = "Great! How many people will be traveling?"

WELCOME_BACK = "Hello {name}! Welcome back to " + COMPANY_NAME + " 🌍✨\n\n{greeting}"

BOOKING_FINALIZED = (
    "🎉 **BOOKING FINALIZED!**\n\n"
    "✅ Your booking request has been successfully submitted!\n"
    "📧 Our team will review your details and send you the final pricing within 24 hours.\n"
    "📞 We will contact you soon to confirm availability and process your booking.\n\n"
    "Thank you for choosing **" + COMPANY_NAME + "**! 🌍✨\n\n"
    "*Please keep this chat open for updates.*"
)

BOOKING_MISSING_DETAILS = (
    "❌ **BOOKING ERROR**\n\n"
    "I couldn't find all of your booking details in our conversation.\n"
    "Still needed: {missing}\n\n"
    "📅 Please share dates in DD/MM/YYYY format."
)

BOOKING_DISPATCH_FAILED = (
    "❌ **BOOKING ERROR**\n\n"
    "Sorry, there was an issue processing your booking request.\n"
    "Please try again in a few minutes or contact our support team."
)

SYSTEM_ERROR = (
    "❌ **SYSTEM ERROR**\n\n"
    "Sorry, there was an error processing your request.\n"
    "Please try again or contact our support team."
)

EXECUTIVE_FORWARDED = (
    "✅ Great! Your booking request has been forwarded to our executive team. "
    "They will contact you shortly to finalize your trip details and payment. "
    "Thank you for choosing " + COMPANY_NAME + "!"
)

EXECUTIVE_FORWARDED_WITH_QUOTES = (
    "✅ **BOOKING REQUEST SENT!**\n\n"
    "Your booking request with the received quotes has been forwarded to our executive team.\n"
    "They will contact you shortly to finalize your trip details and process payment.\n\n"
    "Thank you for choosing " + COMPANY_NAME + "! 🌍✨"
)

QUOTES_NOT_RECEIVED = (
    "❌ **QUOTES NOT RECEIVED**\n\n"
    "You can only use 'book my trip now' after receiving travel quotes.\n"
    "Please wait for our team to send you pricing options, then reply with this command.\n\n"
    "Thank you for your patience! 🌟"
)

EXECUTIVE_UNAVAILABLE = "Sorry, our booking system is temporarily unavailable. Please try again later."
BOOKING_REQUEST_ERROR = (
    "Sorry, there was an error processing your booking request. "
    "Please try again or contact our support team."
)

PRICE_INQUIRY_RECEIVED = "Thank you for your inquiry! Our team will get back to you with pricing details soon."
PRICE_INQUIRY_FAILED = "Sorry, there was an issue processing your inquiry. Please try again later."
PRICE_INQUIRY_ERROR = "Sorry, there was an error processing your request. Please try again."

SHEET_SAVE_FAILED = "❌ Sorry, there was an issue saving your booking information. Please try again."

PROVIDER_APOLOGY = "I'm sorry, I'm having trouble processing your request right now. Please try again later."

TRAVEL_DOCUMENT_FALLBACK = (
    "🛂 For international trips you need a passport valid for at least 6 months from your travel date. "
    "Visa rules depend on your nationality; our executive will share the exact document checklist "
    "together with your booking."
)

# Words a provider-phrased question must contain so the next reply is recognised
FIELD_PROMPT_CUES = {
    'customer_name': ['full name'],
    'start_date': ['start'],
    'number_of_people': ['how many', 'people'],
}


class PromptTemplates:
    """Builds provider prompts and deterministic fallbacks"""

    ROLE = f"You are a friendly travel booking assistant for {COMPANY_NAME} on WhatsApp."

    def field_question(self, field: str, booking: BookingState) -> str:
        """Deterministic question for the next missing field"""
        if field == 'customer_name':
            return NAME_PROMPT
        if field == 'start_date':
            return START_DATE_PROMPT.format(name=booking.customer_name)
        return PEOPLE_PROMPT

    def field_question_prompt(self, field: str, booking: BookingState, history: str) -> str:
        """Ask a provider to phrase the question for one missing field"""
        wording = {
            'customer_name': 'their full name (use the words "full name")',
            'start_date': 'the date they want their trip to start, in DD/MM/YYYY format (use the word "start")',
            'number_of_people': 'how many people will be traveling (use the words "how many people")',
        }[field]

        return (
            f"{self.ROLE}\n\n"
            f"{self._history_block(history)}"
            f"KNOWN DETAILS:\n{self._status_block(booking)}\n\n"
            f"Ask the customer for {wording}.\n"
            "Ask only this one question, in at most 25 words, warm and clear."
        )

    def general_prompt(self, message: str, booking: BookingState, history: str, packages_context: str) -> str:
        """Open-ended reply with package and booking context"""
        return (
            f"{self.ROLE}\n"
            "Help the customer understand travel packages and collect their booking details.\n\n"
            f"AVAILABLE PACKAGES:\n{packages_context}\n\n"
            f"{self._history_block(history)}"
            f"CUSTOMER MESSAGE: \"{message}\"\n\n"
            f"CURRENT BOOKING STATUS:\n{self._status_block(booking)}\n\n"
            "Your job:\n"
            "- Answer naturally in a conversational way.\n"
            "- Keep your answers concise, 20 to 25 words when asking questions.\n"
            "- If the customer wants to book, tell them to reply \"ready to book\".\n"
            "- Never invent prices; vendors send quotes after the booking is finalized."
        )

    def travel_document_prompt(self, message: str, booking: BookingState, history: str) -> str:
        destination = booking.destination or "the customer's destination"
        return (
            f"{self.ROLE}\n\n"
            f"{self._history_block(history)}"
            f"The customer is asking about travel documents for {destination}.\n"
            f"CUSTOMER MESSAGE: \"{message}\"\n\n"
            "Answer in at most 60 words: passport validity, visa type and anything to carry. "
            "Recommend confirming current rules with the executive before travel."
        )

    def package_question_prompt(self, message: str, topic: str, package: Dict, history: str) -> str:
        return (
            f"{self.ROLE}\n\n"
            f"PACKAGE DETAILS:\n"
            f"Name: {package['name']}\n"
            f"Destination: {package['destination']}\n"
            f"Duration: {package['duration']}\n"
            f"Highlights: {', '.join(package['highlights'])}\n"
            f"Accommodation: {package['accommodation']}\n"
            f"Food: {package['food']}\n"
            f"Attractions: {package['attractions']}\n\n"
            f"{self._history_block(history)}"
            f"The customer asks about {topic}: \"{message}\"\n\n"
            "Answer only from the package details above in at most 60 words. "
            "End by inviting them to reply \"ready for this package\" to start booking."
        )

    def package_answer(self, topic: str, package: Dict) -> str:
        """Deterministic package answer keyed on sub-topic"""
        if topic == 'accommodation':
            body = f"🏨 **Accommodation:** {package['accommodation']}."
        elif topic == 'food':
            body = f"🍽️ **Food:** {package['food']}."
        elif topic == 'attractions':
            body = f"📍 **Attractions nearby:** {package['attractions']}."
        else:
            highlights = "\n".join(f"• {item}" for item in package['highlights'])
            body = (
                f"🌴 **{package['name']}** ({package['duration']}) in {package['destination']}\n\n"
                f"{highlights}"
            )
        return f"{body}\n\nReply **\"ready for this package\"** whenever you want to start your booking."

    @staticmethod
    def has_cues(text: str, field: str) -> bool:
        """True when a phrased question still carries the words extraction relies on"""
        lowered = (text or "").lower()
        return all(cue in lowered for cue in FIELD_PROMPT_CUES.get(field, []))

    @staticmethod
    def _history_block(history: Optional[str]) -> str:
        return f"CONVERSATION HISTORY:\n{history}\n\n" if history else ""

    @staticmethod
    def _status_block(booking: BookingState) -> str:
        summary = booking.get_summary()
        if not summary:
            return "Nothing collected yet."
        return "\n".join(f"{label}: {value}" for label, value in summary.items())
