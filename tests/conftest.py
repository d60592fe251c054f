# conftest.py

from typing import Any, Dict, List, Optional

import pytest

from travel_agent.engine.flow_controller import FlowController
from travel_agent.models.transcript import TranscriptEntry
from travel_agent.services.backend_client import BackendClient
from travel_agent.services.flow_state_store import FlowStateStore
from travel_agent.services.providers import BaseProvider, ProviderChain
from travel_agent.services.transcript_store import JsonTranscriptStore
from travel_agent.utils.errors import ProviderError, TransportError


class FakeProvider(BaseProvider):
    """Returns a fixed reply, or fails when reply is None"""

    def __init__(self, name: str, reply: Optional[str] = None):
        super().__init__(timeout=1)
        self.name = name
        self.reply = reply
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.reply is None:
            raise ProviderError(self.name, "unavailable")
        return self.reply


class FakeWhatsApp:
    name = "fake"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[tuple] = []

    def is_ready(self) -> bool:
        return True

    async def send(self, recipient: str, text: str) -> Dict[str, Any]:
        if self.fail:
            raise TransportError("network down")
        self.sent.append((recipient, text))
        return {"message_id": f"wamid.{len(self.sent)}", "status": "sent"}


class FakeBackend(BackendClient):
    def __init__(self, customers=None, dispatch_ok=True, vendor_ok=True):
        super().__init__(base_url="http://backend.test")
        self.customers = customers
        self.dispatch_ok = dispatch_ok
        self.vendor_ok = vendor_ok
        self.daywise_payloads: List[Dict[str, Any]] = []
        self.vendor_payloads: List[Dict[str, Any]] = []

    async def get_customer_data(self, phone):
        return self.customers

    async def send_vendor_email(self, inquiry):
        self.vendor_payloads.append(inquiry)
        return {"success": True} if self.vendor_ok else None

    async def send_daywise_booking_email(self, booking):
        self.daywise_payloads.append(booking)
        return {"success": True} if self.dispatch_ok else None


class FakeSheets:
    def __init__(self, configured: bool = True, ok: bool = True):
        self.configured = configured
        self.ok = ok
        self.rows: List[Dict[str, Any]] = []

    def is_configured(self) -> bool:
        return self.configured

    async def append_booking(self, booking):
        if self.ok:
            self.rows.append(booking)
        return self.ok


def entries(*pairs) -> List[TranscriptEntry]:
    """('user' | 'bot', text) pairs as transcript entries"""
    return [
        TranscriptEntry(timestamp=f"2026-01-01T00:00:{index:02d}", message=text, is_bot=(speaker == "bot"))
        for index, (speaker, text) in enumerate(pairs)
    ]


@pytest.fixture
def store():
    return JsonTranscriptStore(path=None)


@pytest.fixture
def flow_states():
    return FlowStateStore(max_users=100, ttl_seconds=600)


@pytest.fixture
def whatsapp():
    return FakeWhatsApp()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def sheets():
    return FakeSheets(configured=False)


@pytest.fixture
def make_controller(store, flow_states, whatsapp, backend, sheets):
    """Controller factory; providers fail unless replies are given"""

    def build(replies=(None, None, None), executive_phone="919999999999", **overrides):
        providers = ProviderChain([
            FakeProvider(f"p{index}", reply) for index, reply in enumerate(replies, 1)
        ])
        options = dict(
            transcript_store=store,
            flow_states=flow_states,
            providers=providers,
            backend=backend,
            sheets=sheets,
            whatsapp=whatsapp,
            executive_phone=executive_phone,
        )
        options.update(overrides)
        return FlowController(**options)

    return build
