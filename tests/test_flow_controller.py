# test_flow_controller.py

import asyncio

from conftest import FakeBackend, FakeSheets, FakeWhatsApp
from travel_agent.models.state import FlowStage
from travel_agent.models.transcript import QuoteRecord, VendorQuote
from travel_agent.prompts import templates

USER = "919876543210"
EXECUTIVE = "919999999999"


def say(controller, text, user=USER):
    return asyncio.run(controller.handle_message(user, text))


def collect_details(controller):
    """Walk the in-chat collection up to the booking summary"""
    return [
        say(controller, "ready to book"),
        say(controller, "pratham rathore"),
        say(controller, "23/06/2026"),
        say(controller, "8"),
    ]


# ---------------- Booking collection ----------------

def test_collection_asks_fields_in_order(make_controller, flow_states):
    """Name, then start date, then party size, then the summary"""
    controller = make_controller()
    replies = collect_details(controller)

    assert replies[0] == templates.NAME_PROMPT
    assert replies[1] == templates.START_DATE_PROMPT.format(name="Pratham Rathore")
    assert replies[2] == templates.PEOPLE_PROMPT
    assert "BOOKING SUMMARY" in replies[3]
    assert "2026-06-23" in replies[3]
    assert "2026-06-28" in replies[3]
    assert "Travelers: 8" in replies[3]
    assert flow_states.peek(USER).stage == FlowStage.READY_TO_FINALIZE


def test_every_turn_is_stored_and_sent(make_controller, store, whatsapp):
    controller = make_controller()
    say(controller, "ready to book")

    history = store.get_history(USER)
    assert [(entry.is_bot, entry.message) for entry in history] == [
        (False, "ready to book"),
        (True, templates.NAME_PROMPT),
    ]
    assert whatsapp.sent == [(USER, templates.NAME_PROMPT)]


def test_provider_phrased_question_used_when_it_keeps_cues(make_controller):
    controller = make_controller(replies=("Lovely! What is your full name?",))
    say(controller, "ready to book")
    assert say(controller, "23/06/2026") == "Lovely! What is your full name?"


def test_provider_phrased_question_without_cues_is_replaced(make_controller):
    controller = make_controller(replies=("Tell me more about you!",))
    say(controller, "ready to book")
    assert say(controller, "23/06/2026") == templates.NAME_PROMPT


# ---------------- Finalize ----------------

def test_finalize_dispatches_daywise_emails(make_controller, backend, flow_states):
    controller = make_controller()
    collect_details(controller)

    assert say(controller, "finalize") == templates.BOOKING_FINALIZED
    assert flow_states.peek(USER).stage == FlowStage.FINALIZED

    payload = backend.daywise_payloads[0]
    assert payload["customerPhone"] == USER
    assert payload["customerName"] == "Pratham Rathore"
    assert payload["package"] == "P001"
    assert payload["startDate"] == "2026-06-23"
    assert payload["endDate"] == "2026-06-28"
    assert payload["numberOfPeople"] == "8"
    assert payload["status"] == "Pending"
    assert payload["notes"].endswith(" Bali trip")


def test_finalize_prefers_registered_name(make_controller):
    backend = FakeBackend(customers=[{"name": "Pratham Singh Rathore"}])
    controller = make_controller(backend=backend)
    collect_details(controller)

    say(controller, "finalize")
    assert backend.daywise_payloads[0]["customerName"] == "Pratham Singh Rathore"


def test_finalize_with_missing_details_keeps_stage(make_controller, backend, flow_states):
    controller = make_controller()
    reply = say(controller, "finalize")

    assert "Name, Start date, Number of guests" in reply
    assert backend.daywise_payloads == []
    assert flow_states.peek(USER).stage == FlowStage.IDLE


def test_finalize_dispatch_failure(make_controller, flow_states):
    controller = make_controller(backend=FakeBackend(dispatch_ok=False))
    collect_details(controller)

    assert say(controller, "finalize") == templates.BOOKING_DISPATCH_FAILED
    assert flow_states.peek(USER).stage == FlowStage.READY_TO_FINALIZE


# ---------------- Commands and questions ----------------

def test_greeting_for_new_and_registered_customers(make_controller):
    controller = make_controller()
    assert say(controller, "hi") == controller.greeting_message

    registered = make_controller(backend=FakeBackend(customers=[{"name": "Asha"}]))
    assert say(registered, "hello", user="919811111111").startswith("Hello Asha! Welcome back")


def test_price_inquiry_emails_vendors(make_controller, backend):
    controller = make_controller()
    assert say(controller, "what is the price?") == templates.PRICE_INQUIRY_RECEIVED
    assert backend.vendor_payloads[0]["customer_phone"] == USER
    assert backend.vendor_payloads[0]["inquiry_text"] == "what is the price?"


def test_price_inquiry_failure(make_controller):
    controller = make_controller(backend=FakeBackend(vendor_ok=False))
    assert say(controller, "send me a quote") == templates.PRICE_INQUIRY_FAILED


def test_book_trip_now_requires_quotes(make_controller, whatsapp):
    controller = make_controller()
    assert say(controller, "book my trip now") == templates.QUOTES_NOT_RECEIVED
    assert whatsapp.sent == [(USER, templates.QUOTES_NOT_RECEIVED)]


def test_book_trip_now_forwards_quotes_to_executive(make_controller, store, whatsapp):
    store.store_quote_data(USER, QuoteRecord(quotes=[VendorQuote(vendor_name="Island Tours", final_price=1200)]))
    controller = make_controller()

    assert say(controller, "book my trip now") == templates.EXECUTIVE_FORWARDED_WITH_QUOTES
    recipient, text = whatsapp.sent[0]
    assert recipient == EXECUTIVE
    assert "NEW BOOKING REQUEST" in text
    assert "Island Tours: $1200" in text


def test_book_trip_without_executive_phone(make_controller):
    controller = make_controller(executive_phone=None)
    assert say(controller, "book") == templates.EXECUTIVE_UNAVAILABLE


def test_book_trip_forwards_without_quotes(make_controller, whatsapp):
    controller = make_controller()
    assert say(controller, "book my trip") == templates.EXECUTIVE_FORWARDED
    assert whatsapp.sent[0][0] == EXECUTIVE


def test_travel_document_question(make_controller):
    assert say(make_controller(), "do I need a visa") == templates.TRAVEL_DOCUMENT_FALLBACK

    answered = make_controller(replies=("Passport valid for 6 months and a visa on arrival.",))
    assert say(answered, "do I need a visa", user="919811111111") == "Passport valid for 6 months and a visa on arrival."


def test_package_question_falls_back_to_package_details(make_controller):
    controller = make_controller()
    say(controller, "tell me about bali")
    reply = say(controller, "is breakfast included?")
    assert "Food:" in reply
    assert "ready for this package" in reply


# ---------------- General replies ----------------

def test_general_reply_from_provider(make_controller):
    controller = make_controller(replies=(None, "Happy to help with Bali!"))
    assert say(controller, "thanks") == "Happy to help with Bali!"


def test_apology_sent_once_then_silent(make_controller, store, whatsapp):
    controller = make_controller()
    assert say(controller, "thanks") == templates.PROVIDER_APOLOGY
    assert say(controller, "thanks again") == ""

    assert len(whatsapp.sent) == 1
    assert [entry.is_bot for entry in store.get_history(USER)] == [False, True, False]


def test_unexpected_error_becomes_system_error(make_controller):
    class BrokenClassifier:
        def classify(self, message, package_selected=False):
            raise RuntimeError("boom")

    controller = make_controller(classifier=BrokenClassifier())
    assert say(controller, "hello") == templates.SYSTEM_ERROR


def test_send_failure_is_not_raised(make_controller, store):
    controller = make_controller(whatsapp=FakeWhatsApp(fail=True))
    assert say(controller, "ready to book") == templates.NAME_PROMPT
    assert len(store.get_history(USER)) == 2


# ---------------- Spreadsheet ----------------

BOOKING_MESSAGE = "Booking the bali trip on 15/07/2026 for 2 people, my name is Asha Verma"


def test_complete_booking_logged_to_sheet_once(make_controller):
    sheets = FakeSheets(configured=True)
    controller = make_controller(sheets=sheets)

    say(controller, BOOKING_MESSAGE)
    say(controller, BOOKING_MESSAGE)

    assert len(sheets.rows) == 1
    row = sheets.rows[0]
    assert row["customerName"] == "Asha Verma"
    assert row["startDate"] == "2026-07-15"
    assert row["endDate"] == "2026-07-20"
    assert row["numberOfPeople"] == "2"
    assert row["destination"] == "Bali, Indonesia"


def test_sheet_failure_is_reported(make_controller):
    controller = make_controller(sheets=FakeSheets(configured=True, ok=False))
    assert say(controller, BOOKING_MESSAGE) == templates.SHEET_SAVE_FAILED


def test_third_provider_reply_does_not_set_apology_guard(make_controller, flow_states):
    controller = make_controller(replies=(None, None, "Hello!"))
    assert say(controller, "thanks") == "Hello!"
    assert flow_states.peek(USER).duplicate_guard_at is None


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_apology_repeats_after_guard_window(make_controller, whatsapp):
    """An active user gets a fresh apology once the guard window has passed"""
    clock = Clock()
    controller = make_controller(timer=clock)

    sent = []
    for minute in range(0, 120, 20):
        clock.now = minute * 60.0
        sent.append(say(controller, f"thanks {minute}") == templates.PROVIDER_APOLOGY)

    assert sent == [True] * 6
    assert len(whatsapp.sent) == 6


def test_apology_guard_holds_within_window(make_controller):
    clock = Clock()
    controller = make_controller(timer=clock)

    assert say(controller, "thanks") == templates.PROVIDER_APOLOGY
    clock.now = 299.0
    assert say(controller, "thanks again") == ""
    clock.now = 300.0
    assert say(controller, "still there?") == templates.PROVIDER_APOLOGY


def test_provider_success_clears_apology_guard(make_controller, flow_states):
    controller = make_controller()
    say(controller, "thanks")
    assert flow_states.peek(USER).duplicate_guard_at is not None

    controller.providers.providers[0].reply = "Back online!"
    assert say(controller, "any news?") == "Back online!"
    assert flow_states.peek(USER).duplicate_guard_at is None
