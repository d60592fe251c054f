# test_orchestrator.py

import asyncio

from conftest import FakeBackend, FakeProvider, FakeSheets, FakeWhatsApp
from travel_agent.models.api_models import InboundMessage, VendorQuotePayload
from travel_agent.models.state import FlowStage
from travel_agent.orchestrator import TravelAgentOrchestrator
from travel_agent.prompts import templates
from travel_agent.services.flow_state_store import FlowStateStore
from travel_agent.services.providers import ProviderChain
from travel_agent.services.transcript_store import JsonTranscriptStore


def build_orchestrator(whatsapp=None):
    return TravelAgentOrchestrator(
        transcript_store=JsonTranscriptStore(path=None),
        flow_states=FlowStateStore(max_users=100, ttl_seconds=600),
        providers=ProviderChain([FakeProvider("gemini")]),
        backend=FakeBackend(),
        sheets=FakeSheets(configured=False),
        whatsapp=whatsapp or FakeWhatsApp(),
        executive_phone="919999999999",
    )


def test_queued_messages_answered_in_order():
    """Three quick messages from one user are answered in arrival order"""
    orchestrator = build_orchestrator()

    async def scenario():
        for index, body in enumerate(["ready to book", "pratham rathore", "23/06/2026"]):
            orchestrator.enqueue(InboundMessage(sender_id="919876543210", body=body, message_id=f"wamid.{index}"))
        await orchestrator.queue.drain()

    asyncio.run(scenario())

    replies = [text for _, text in orchestrator.whatsapp.sent]
    assert replies == [
        templates.NAME_PROMPT,
        templates.START_DATE_PROMPT.format(name="Pratham Rathore"),
        templates.PEOPLE_PROMPT,
    ]


def test_vendor_quote_then_book_my_trip_now():
    orchestrator = build_orchestrator()
    payload = VendorQuotePayload(
        customer_name="Pratham Rathore",
        customer_phone="919876543210",
        quotes=[{"vendor_name": "Island Tours", "final_price": 1200}],
    )

    assert asyncio.run(orchestrator.handle_vendor_quote(payload)) is True
    assert orchestrator.flow_states.peek("919876543210").stage == FlowStage.QUOTES_RECEIVED

    reply = asyncio.run(orchestrator.handle_message("919876543210", "book my trip now"))
    assert reply == templates.EXECUTIVE_FORWARDED_WITH_QUOTES
    executive, text = orchestrator.whatsapp.sent[1]
    assert executive == "919999999999"
    assert "Island Tours: $1200" in text


def test_vendor_quote_send_failure_still_stores_quotes():
    orchestrator = build_orchestrator(whatsapp=FakeWhatsApp(fail=True))
    payload = VendorQuotePayload(
        customer_name="Asha",
        customer_phone="9876543210",
        quotes=[{"vendor_name": "Island Tours", "final_price": 1200}],
    )

    assert asyncio.run(orchestrator.handle_vendor_quote(payload)) is False
    assert orchestrator.transcript_store.get_quote_data("919876543210") is not None
