"""
Conversation Flow Controller - decides the reply for each inbound message
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from config import GREETING_MESSAGE, EXECUTIVE_PHONE
from ..config.settings import AGENT_SETTINGS
from ..config.packages import LIVE_PACKAGE, DESTINATION_KEYWORDS, load_packages, format_package_context
from ..models.booking import BookingState
from ..models.intent import Intent
from ..models.state import FlowStage, PerUserFlowState
from ..models.transcript import TranscriptEntry
from ..prompts import templates
from ..prompts.templates import PromptTemplates
from ..services.backend_client import BackendClient
from ..services.flow_state_store import FlowStateStore
from ..services.providers import ProviderChain
from ..services.sheets_service import SheetsService
from ..services.transcript_store import TranscriptStore
from ..services.whatsapp_service import WhatsAppService
from ..utils.errors import ProviderError, TransportError
from ..utils.formatters import Formatters
from ..utils.helpers import mask_phone
from ..utils.patterns import BOOKING_START_PHRASES
from .aggregator import BookingAggregator
from .intent_classifier import IntentClassifier, package_topic

logger = logging.getLogger(__name__)


class FlowController:
    """Per-user booking state machine.

    Idle -> CollectingBookingInfo -> ReadyToFinalize -> Finalized, with
    QuotesReceived set when vendor quotes arrive. Every turn recomputes the
    booking from the transcript, answers according to the intent, stores
    the user message and the reply, and sends the reply.
    """

    def __init__(
        self,
        transcript_store: TranscriptStore,
        flow_states: FlowStateStore,
        providers: ProviderChain,
        backend: BackendClient,
        sheets: SheetsService,
        whatsapp: WhatsAppService,
        aggregator: Optional[BookingAggregator] = None,
        classifier: Optional[IntentClassifier] = None,
        prompts: Optional[PromptTemplates] = None,
        packages: Optional[List[Dict[str, Any]]] = None,
        executive_phone: Optional[str] = EXECUTIVE_PHONE,
        greeting_message: str = GREETING_MESSAGE,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.transcript_store = transcript_store
        self.flow_states = flow_states
        self.providers = providers
        self.backend = backend
        self.sheets = sheets
        self.whatsapp = whatsapp
        self.aggregator = aggregator or BookingAggregator()
        self.classifier = classifier or IntentClassifier()
        self.prompts = prompts or PromptTemplates()
        self.packages = packages or load_packages()
        self.executive_phone = executive_phone
        self.greeting_message = greeting_message
        self.timer = timer

    @property
    def package(self) -> Dict[str, Any]:
        return self.packages[0]

    # ==================== Entry point ====================

    async def handle_message(self, user_id: str, message: str) -> str:
        """Process one inbound message; returns the reply that was sent ('' if none)"""
        message = (message or "").strip()
        logger.info(f"📨 Message from {mask_phone(user_id)}: '{message[:80]}'")

        state = self.flow_states.get(user_id)
        try:
            history = self.transcript_store.get_history(user_id)
            booking = self.aggregator.aggregate(user_id, history, message)
            intent = self.classifier.classify(message, package_selected=bool(booking.package))
            logger.info(f"🧭 Intent for {mask_phone(user_id)}: {intent.value} (stage={state.stage.value})")

            reply = await self._dispatch(intent, user_id, message, booking, state, history)
        except Exception as e:
            logger.error(f"❌ Error handling message from {mask_phone(user_id)}: {e}", exc_info=True)
            reply = templates.SYSTEM_ERROR

        self.flow_states.save(user_id, state)

        self.transcript_store.add_message(user_id, message, is_bot=False)
        if reply:
            self.transcript_store.add_message(user_id, reply, is_bot=True)
            await self.send(user_id, reply)
        return reply

    async def send(self, recipient: str, text: str) -> bool:
        """Send through the transport; failures are logged, never raised"""
        try:
            await self.whatsapp.send(recipient, text)
            logger.info(f"🤖 Reply sent to {mask_phone(recipient)}: '{text[:80]}'")
            return True
        except TransportError as e:
            logger.error(f"❌ Failed to send message to {mask_phone(recipient)}: {e}")
        except Exception as e:
            logger.error(f"❌ Unexpected send error for {mask_phone(recipient)}: {e}", exc_info=True)
        return False

    async def _dispatch(
        self,
        intent: Intent,
        user_id: str,
        message: str,
        booking: BookingState,
        state: PerUserFlowState,
        history: List[TranscriptEntry],
    ) -> str:
        if intent == Intent.GREETING:
            return await self.handle_greeting(user_id)
        if intent == Intent.PRICE_INQUIRY:
            return await self.handle_price_inquiry(user_id, message)
        if intent == Intent.FINALIZE:
            return await self.handle_finalize(user_id, message, booking, state, history)
        if intent == Intent.BOOK_TRIP:
            return await self.handle_book_trip(user_id, booking, require_quotes=False)
        if intent == Intent.BOOK_TRIP_NOW:
            return await self.handle_book_trip(user_id, booking, require_quotes=True)
        if intent == Intent.TRAVEL_DOCUMENT_QUESTION:
            return await self.handle_travel_document(user_id, message, booking)
        if intent == Intent.PACKAGE_QUESTION:
            return await self.handle_package_question(user_id, message)

        # Booking info and everything unclassified
        if self.is_booking_start(message):
            state.move_to(FlowStage.COLLECTING_BOOKING_INFO)
            logger.info(f"📝 Booking collection started for {mask_phone(user_id)}")
            return templates.NAME_PROMPT

        if intent == Intent.BOOKING_INFO:
            failure = await self.log_booking_to_sheet(user_id, booking, state, history, message)
            if failure:
                return failure

        if state.in_booking_process:
            return await self.continue_collection(user_id, booking, state)

        return await self.handle_general(user_id, message, booking, state)

    # ==================== Intent handlers ====================

    async def handle_greeting(self, user_id: str) -> str:
        customer_data = await self.backend.get_customer_data(user_id)
        name = self.backend.registered_name(customer_data)
        if name:
            return templates.WELCOME_BACK.format(name=name, greeting=self.greeting_message)
        return self.greeting_message

    async def handle_price_inquiry(self, user_id: str, message: str) -> str:
        try:
            customer_data = await self.backend.get_customer_data(user_id)
            result = await self.backend.send_vendor_email({
                "customer_phone": user_id,
                "inquiry_text": message,
                "customer_data": customer_data,
            })
            if result:
                return templates.PRICE_INQUIRY_RECEIVED
            return templates.PRICE_INQUIRY_FAILED
        except Exception as e:
            logger.error(f"❌ Error handling price inquiry: {e}", exc_info=True)
            return templates.PRICE_INQUIRY_ERROR

    async def handle_finalize(
        self,
        user_id: str,
        message: str,
        booking: BookingState,
        state: PerUserFlowState,
        history: List[TranscriptEntry],
    ) -> str:
        """Dispatch the day-wise vendor emails once name, start date and party size are known"""
        try:
            customer_data = await self.backend.get_customer_data(user_id)
            registered = self.backend.registered_name(customer_data)
            if registered:
                booking = booking.model_copy(update={'customer_name': registered})

            missing = booking.missing_fields()
            if missing:
                labels = ", ".join(BookingState.FIELD_LABELS[field] for field in missing)
                logger.info(f"⚠️ Finalize rejected for {mask_phone(user_id)}, missing: {labels}")
                return templates.BOOKING_MISSING_DETAILS.format(missing=labels)

            booking = booking.with_derived_end_date()
            payload = self.booking_payload(user_id, booking, history, message)
            result = await self.backend.send_daywise_booking_email(payload)

            if result:
                state.move_to(FlowStage.FINALIZED)
                logger.info(f"✅ Booking finalized for {mask_phone(user_id)}")
                return templates.BOOKING_FINALIZED

            logger.error(f"❌ Day-wise booking email failed for {mask_phone(user_id)}")
            return templates.BOOKING_DISPATCH_FAILED
        except Exception as e:
            logger.error(f"❌ Error finalizing booking: {e}", exc_info=True)
            return templates.SYSTEM_ERROR

    async def handle_book_trip(self, user_id: str, booking: BookingState, require_quotes: bool) -> str:
        """Forward everything known about the customer to the executive"""
        record = self.transcript_store.get_quote_data(user_id)
        if require_quotes and record is None:
            return templates.QUOTES_NOT_RECEIVED

        if not self.executive_phone:
            logger.error("❌ EXECUTIVE_PHONE not configured")
            return templates.EXECUTIVE_UNAVAILABLE

        try:
            summary = self.transcript_store.get_context(user_id)
            text = Formatters.format_executive_message(
                user_id,
                booking,
                summary,
                quotes=record.quotes if record else None,
            )
            await self.whatsapp.send(self.executive_phone, text)
            logger.info(f"✅ Booking request for {mask_phone(user_id)} forwarded to executive")
        except Exception as e:
            logger.error(f"❌ Error forwarding booking request: {e}", exc_info=True)
            return templates.BOOKING_REQUEST_ERROR

        if require_quotes:
            return templates.EXECUTIVE_FORWARDED_WITH_QUOTES
        return templates.EXECUTIVE_FORWARDED

    async def handle_travel_document(self, user_id: str, message: str, booking: BookingState) -> str:
        history = self.transcript_store.get_context(user_id)
        prompt = self.prompts.travel_document_prompt(message, booking, history)
        return await self._generate(prompt) or templates.TRAVEL_DOCUMENT_FALLBACK

    async def handle_package_question(self, user_id: str, message: str) -> str:
        topic = package_topic(message) or 'general'
        history = self.transcript_store.get_context(user_id)
        prompt = self.prompts.package_question_prompt(message, topic, self.package, history)
        return await self._generate(prompt) or self.prompts.package_answer(topic, self.package)

    async def continue_collection(self, user_id: str, booking: BookingState, state: PerUserFlowState) -> str:
        """Summary once required fields are known, else ask for the next one"""
        field = booking.next_missing_field()
        if field is None:
            state.move_to(FlowStage.READY_TO_FINALIZE)
            return Formatters.format_booking_summary(booking.with_derived_end_date())

        history = self.transcript_store.get_context(user_id)
        phrased = await self._generate(self.prompts.field_question_prompt(field, booking, history))
        if phrased and self.prompts.has_cues(phrased, field):
            return phrased
        return self.prompts.field_question(field, booking)

    async def handle_general(self, user_id: str, message: str, booking: BookingState, state: PerUserFlowState) -> str:
        """Open-ended provider reply; at most one apology per user per guard window"""
        history = self.transcript_store.get_context(user_id)
        prompt = self.prompts.general_prompt(message, booking, history, format_package_context(self.packages))
        reply = await self._generate(prompt)
        if reply:
            state.duplicate_guard_at = None
            return reply

        now = self.timer()
        if self.apology_guard_active(state, now):
            logger.info(f"🔇 Apology already sent to {mask_phone(user_id)}, staying silent")
            return ""
        state.duplicate_guard_at = now
        return templates.PROVIDER_APOLOGY

    @staticmethod
    def apology_guard_active(state: PerUserFlowState, now: float) -> bool:
        if state.duplicate_guard_at is None:
            return False
        return now - state.duplicate_guard_at < AGENT_SETTINGS["apology_guard_seconds"]

    # ==================== Helpers ====================

    @staticmethod
    def is_booking_start(message: str) -> bool:
        lowered = message.lower()
        return any(phrase in lowered for phrase in BOOKING_START_PHRASES)

    async def log_booking_to_sheet(
        self,
        user_id: str,
        booking: BookingState,
        state: PerUserFlowState,
        history: List[TranscriptEntry],
        message: str,
    ) -> Optional[str]:
        """Append a complete, not yet logged booking; returns an error reply on failure"""
        if not self.sheets.is_configured():
            return None

        booking = booking.with_derived_end_date()
        if not booking.is_complete(BookingState.SHEET_REQUIRED_FIELDS):
            return None

        signature = booking.signature()
        if signature == state.last_logged_booking:
            return None

        if await self.sheets.append_booking(self.booking_payload(user_id, booking, history, message)):
            state.last_logged_booking = signature
            return None
        return templates.SHEET_SAVE_FAILED

    def booking_payload(
        self,
        user_id: str,
        booking: BookingState,
        history: List[TranscriptEntry],
        message: str,
    ) -> Dict[str, Any]:
        """Record sent to the backend and the spreadsheet"""
        notes = " ".join([entry.message for entry in history] + [message]).strip()
        if not any(keyword in notes.lower() for keyword in DESTINATION_KEYWORDS):
            notes += " Bali trip"

        return {
            "customerPhone": user_id,
            "customerName": booking.customer_name,
            "package": self.package.get("id", LIVE_PACKAGE["id"]),
            "destination": booking.destination or self.package["destination"],
            "startDate": booking.start_date,
            "endDate": booking.end_date,
            "numberOfPeople": booking.number_of_people,
            "totalPrice": booking.total_price,
            "status": "Pending",
            "notes": notes,
        }

    async def _generate(self, prompt: str) -> Optional[str]:
        """Provider chain text, or None when every provider failed"""
        try:
            return await self.providers.generate(prompt)
        except ProviderError as e:
            logger.warning(f"❌ Text generation failed: {e}")
            return None
