# test_services.py

import asyncio

import pytest

from travel_agent.services.backend_client import BackendClient
from travel_agent.services.sheets_service import SheetsService
from travel_agent.services.whatsapp_service import MetaWhatsAppService, TwilioWhatsAppService
from travel_agent.utils.errors import BackendError, TransportError
from travel_agent.utils.helpers import normalize_phone, mask_phone


class FlakyBackend(BackendClient):
    """Fails the first `failures` requests"""

    def __init__(self, failures):
        self.waits = []

        async def sleep(seconds):
            self.waits.append(seconds)

        super().__init__(base_url="http://backend.test", sleep=sleep)
        self.failures = failures
        self.calls = []

    async def _request(self, method, path, timeout, **kwargs):
        self.calls.append((method, path, timeout))
        if len(self.calls) <= self.failures:
            raise BackendError(f"{method} {path} failed")
        return {"success": True}


def test_daywise_email_retried_with_backoff():
    backend = FlakyBackend(failures=2)
    result = asyncio.run(backend.send_daywise_booking_email({"customerPhone": "1"}))

    assert result == {"success": True}
    assert backend.waits == [2.0, 4.0]
    assert backend.calls[0] == ("POST", "/api/send-daywise-booking-emails/", 30)


def test_daywise_email_gives_up_after_five_attempts():
    backend = FlakyBackend(failures=10)
    assert asyncio.run(backend.send_daywise_booking_email({})) is None
    assert len(backend.calls) == 5


def test_single_post_returns_none_on_failure():
    backend = FlakyBackend(failures=1)
    assert asyncio.run(backend.send_vendor_email({})) is None
    assert len(backend.calls) == 1


def test_customer_lookup_unavailable_backend():
    backend = FlakyBackend(failures=1)
    assert asyncio.run(backend.get_customer_data("919876543210")) is None


def test_registered_name():
    assert BackendClient.registered_name([{"name": "Asha"}, {"name": "Other"}]) == "Asha"
    assert BackendClient.registered_name([]) is None
    assert BackendClient.registered_name(None) is None


def test_sheet_row_columns():
    row = SheetsService.build_row({
        "customerPhone": "919876543210",
        "customerName": "Asha Verma",
        "package": "P001",
        "startDate": "2026-07-15",
        "numberOfPeople": "2",
    })
    assert row[1:5] == ["919876543210", "Asha Verma", "P001", ""]
    assert row[5] == "2026-07-15"
    assert row[7] == "2"
    assert row[9] == "Pending"


def test_sheets_unconfigured_without_key_file(tmp_path):
    service = SheetsService(sheet_id="sheet", key_file=str(tmp_path / "missing.json"))
    assert not service.is_configured()
    assert asyncio.run(service.append_booking({})) is False


def test_meta_transport_requires_credentials():
    service = MetaWhatsAppService(token=None, phone_number_id=None)
    assert not service.is_ready()
    with pytest.raises(TransportError, match="not configured"):
        asyncio.run(service.send("919876543210", "hi"))


def test_twilio_addresses():
    assert TwilioWhatsAppService._address("919876543210") == "whatsapp:+919876543210"
    assert TwilioWhatsAppService._address("+14155238886") == "whatsapp:+14155238886"
    assert TwilioWhatsAppService._address("whatsapp:+1") == "whatsapp:+1"
    assert not TwilioWhatsAppService(account_sid=None, auth_token=None).is_ready()


def test_phone_helpers():
    assert normalize_phone("98765 43210") == "919876543210"
    assert normalize_phone("+91-98765-43210") == "919876543210"
    assert mask_phone("919876543210") == "9198****3210"


def test_booking_email_retried_three_times():
    backend = FlakyBackend(failures=10)
    assert asyncio.run(backend.send_booking_email({"customerPhone": "1"})) is None
    assert backend.waits == [1.0, 2.0]
    assert [call[1] for call in backend.calls] == ["/api/send-booking-email/"] * 3


def test_create_booking_is_a_single_post():
    backend = FlakyBackend(failures=0)
    assert asyncio.run(backend.create_booking({"customerPhone": "1"})) == {"success": True}
    assert backend.calls == [("POST", "/api/bookings/", 5)]


def test_logging_level_comes_from_deployment_config():
    import config
    from travel_agent.config.settings import LOGGING_CONFIG

    assert LOGGING_CONFIG["level"] == config.LOG_LEVEL
