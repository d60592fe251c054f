# test_aggregator.py

from conftest import entries
from travel_agent.engine.aggregator import BookingAggregator
from travel_agent.extractors import BaseExtractor
from travel_agent.models.booking import BookingState
from travel_agent.prompts.templates import NAME_PROMPT, PEOPLE_PROMPT, START_DATE_PROMPT


class CountingExtractor(BaseExtractor):
    field_name = "email"

    def __init__(self):
        super().__init__()
        self.calls = 0

    def extract(self, message, context):
        self.calls += 1
        return self.build_result('fixed', email="asha@example.com")


class BrokenExtractor(BaseExtractor):
    def extract(self, message, context):
        raise RuntimeError("boom")


def collection_history():
    return entries(
        ("user", "ready to book"),
        ("bot", NAME_PROMPT),
        ("user", "pratham rathore"),
        ("bot", START_DATE_PROMPT.format(name="Pratham Rathore")),
        ("user", "23/06/2026"),
        ("bot", PEOPLE_PROMPT),
    )


def test_aggregate_collects_fields_from_whole_transcript():
    """Name, dates and party size come from different turns"""
    booking = BookingAggregator().aggregate("919876543210", collection_history(), "8")

    assert booking.customer_name == "Pratham Rathore"
    assert booking.start_date == "2026-06-23"
    assert booking.end_date == "2026-06-28"
    assert booking.number_of_people == "8"
    assert booking.is_complete()


def test_failing_extractor_does_not_break_the_others():
    aggregator = BookingAggregator(extractors=[BrokenExtractor(), CountingExtractor()])
    booking = aggregator.aggregate("u1", [], "hello")
    assert booking.email == "asha@example.com"


def test_aggregate_is_memoized_per_transcript_tail():
    counter = CountingExtractor()
    aggregator = BookingAggregator(extractors=[counter])
    history = entries(("user", "hi"))

    first = aggregator.aggregate("u1", history, "ok")
    second = aggregator.aggregate("u1", history, "ok")
    assert counter.calls == 1
    assert first == second
    assert first is not second

    aggregator.aggregate("u1", history + entries(("bot", "hello")), "ok")
    assert counter.calls == 2


def test_correction_overrides_party_size_when_booking_is_complete():
    history = entries(
        ("user", "I want the bali package"),
        ("bot", NAME_PROMPT),
        ("user", "Asha Verma"),
        ("bot", "Great! When would you like to start?"),
        ("user", "15/07/2026"),
        ("user", "we are 6 people"),
    )
    booking = BookingAggregator().aggregate("u1", history, "no, make it 3")
    assert booking.package == "Bali Explorer (P001)"
    assert booking.number_of_people == "3"


def test_correction_ignored_while_booking_is_incomplete():
    booking = BookingState(customer_name="Asha Verma", number_of_people="6")
    corrected = BookingAggregator.apply_correction(booking, "no, 3")
    assert corrected.number_of_people == "6"


def test_correction_requires_leading_no():
    booking = BookingState(
        customer_name="Asha Verma",
        package="Bali Explorer (P001)",
        start_date="2026-07-15",
        end_date="2026-07-20",
        number_of_people="6",
    )
    assert BookingAggregator.apply_correction(booking, "make it 3").number_of_people == "6"
    assert BookingAggregator.apply_correction(booking, "no for 4 people").number_of_people == "4"


def test_date_then_number_gives_dates_and_party_size():
    booking = BookingAggregator().aggregate("u1", entries(("user", "23/06/2026")), "8")
    assert (booking.start_date, booking.end_date, booking.number_of_people) == ("2026-06-23", "2026-06-28", "8")
    assert booking.customer_name == ""
    assert booking.package == ""


def complete_booking_history():
    return entries(
        ("user", "I want the bali package"),
        ("bot", NAME_PROMPT),
        ("user", "Asha Verma"),
        ("bot", "Great! When would you like to start?"),
        ("user", "15/07/2026"),
        ("user", "we are 6 people"),
    )


def test_date_in_party_size_reply_is_not_a_party_size():
    history = collection_history()
    booking = BookingAggregator().aggregate("u1", history, "we leave 10/03/2026, 4 of us")
    assert booking.number_of_people == "4"

    booking = BookingAggregator().aggregate("u1", history, "2026-06-10 and 3 of us")
    assert booking.number_of_people == "3"


def test_date_correction_keeps_party_size():
    booking = BookingAggregator().aggregate("u1", complete_booking_history(), "no, start on 12/07/2026")
    assert booking.number_of_people == "6"
    assert booking.start_date == "2026-07-15"


def test_fresh_aggregators_agree():
    """Aggregation depends only on the transcript and the message"""
    history = complete_booking_history()
    first = BookingAggregator().aggregate("u1", history, "no, make it 3")
    second = BookingAggregator().aggregate("u1", history, "no, make it 3")
    assert first == second
    assert first.model_dump() == second.model_dump()
