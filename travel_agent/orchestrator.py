"""
Travel Agent Orchestrator - wires services, queue and flow controller together
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from config import EXECUTIVE_PHONE, TRAVEL_PACKAGES_FILE
from .config.packages import load_packages
from .engine.flow_controller import FlowController
from .engine.message_queue import UserMessageQueue
from .models.api_models import InboundMessage, VendorQuotePayload
from .models.state import FlowStage
from .models.transcript import QuoteRecord
from .services.backend_client import BackendClient
from .services.flow_state_store import FlowStateStore
from .services.providers import ProviderChain
from .services.sheets_service import SheetsService
from .services.transcript_store import TranscriptStore, create_transcript_store
from .services.whatsapp_service import WhatsAppService, create_whatsapp_service
from .utils.formatters import Formatters
from .utils.helpers import normalize_phone, mask_phone

logger = logging.getLogger(__name__)


class TravelAgentOrchestrator:
    """Main entry point for inbound chat messages and backend pushes"""

    def __init__(
        self,
        transcript_store: Optional[TranscriptStore] = None,
        flow_states: Optional[FlowStateStore] = None,
        providers: Optional[ProviderChain] = None,
        backend: Optional[BackendClient] = None,
        sheets: Optional[SheetsService] = None,
        whatsapp: Optional[WhatsAppService] = None,
        executive_phone: Optional[str] = EXECUTIVE_PHONE,
    ):
        self.transcript_store = transcript_store or create_transcript_store()
        self.flow_states = flow_states if flow_states is not None else FlowStateStore()
        self.providers = providers or ProviderChain()
        self.backend = backend or BackendClient()
        self.sheets = sheets or SheetsService()
        self.whatsapp = whatsapp or create_whatsapp_service()

        self.flow_controller = FlowController(
            transcript_store=self.transcript_store,
            flow_states=self.flow_states,
            providers=self.providers,
            backend=self.backend,
            sheets=self.sheets,
            whatsapp=self.whatsapp,
            packages=load_packages(TRAVEL_PACKAGES_FILE),
            executive_phone=executive_phone,
        )
        self.queue = UserMessageQueue()

        logger.info("TravelAgentOrchestrator initialized")

    # ==================== Chat ====================

    def enqueue(self, message: InboundMessage) -> asyncio.Task:
        """Queue an inbound message behind the same sender's earlier messages"""
        logger.info(f"📥 Queued message {message.message_id} from {mask_phone(message.sender_id)}")
        return self.queue.submit(message.sender_id, self.handle_message, message.sender_id, message.body)

    async def handle_message(self, user_id: str, body: str) -> str:
        return await self.flow_controller.handle_message(user_id, body)

    # ==================== Backend pushes ====================

    async def handle_vendor_quote(self, payload: VendorQuotePayload) -> bool:
        """Store the quotes, tell the customer and mark the user as having quotes.

        Runs outside the per-user queue; returns False when the WhatsApp send failed.
        """
        user_id = normalize_phone(payload.customer_phone)
        record = QuoteRecord(
            destination=payload.destination,
            service_type=payload.service_type,
            quotes=payload.quotes,
            quote_request_id=payload.quote_request_id,
        )
        self.transcript_store.store_quote_data(user_id, record)

        state = self.flow_states.get(user_id)
        state.move_to(FlowStage.QUOTES_RECEIVED)
        self.flow_states.save(user_id, state)

        text = Formatters.format_quote_message(payload.customer_name, record)
        self.transcript_store.add_message(user_id, text, is_bot=True)
        sent = await self.flow_controller.send(user_id, text)
        if sent:
            logger.info(f"✅ Vendor quotes sent to {mask_phone(user_id)}")
        return sent

    async def notify_customer(self, phone: str, text: str) -> bool:
        """Send a backend-triggered message and record it in the transcript"""
        user_id = normalize_phone(phone)
        self.transcript_store.add_message(user_id, text, is_bot=True)
        return await self.flow_controller.send(user_id, text)

    # ==================== Status ====================

    def health(self) -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.utcnow().isoformat(),
            "whatsapp": {
                "provider": getattr(self.whatsapp, "name", "unknown"),
                "ready": self.whatsapp.is_ready(),
            },
            "providers": self.providers.configured_providers(),
            "flow_states": self.flow_states.get_stats(),
            "queued_users": self.queue.pending_users(),
        }
