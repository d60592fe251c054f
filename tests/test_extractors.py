# test_extractors.py

from datetime import date

from conftest import entries
from travel_agent.extractors import (
    ConversationView,
    NameExtractor,
    DateExtractor,
    PartySizeExtractor,
    EmailExtractor,
    PackageExtractor,
    PreferenceExtractor,
    BudgetExtractor,
)
from travel_agent.prompts.templates import NAME_PROMPT, PEOPLE_PROMPT


def run(extractor, history, message):
    return extractor.extract(message, ConversationView(history, message))


# ---------------- Name ----------------

def test_name_taken_from_reply_to_full_name_prompt():
    """The whole reply to a full-name question is the name"""
    result = run(NameExtractor(), entries(("bot", NAME_PROMPT)), "Pratham Rathore")
    assert result["customer_name"] == "Pratham Rathore"
    assert result["method"] == "prompt_reply"


def test_name_reply_is_title_cased():
    result = run(NameExtractor(), entries(("bot", "What is your full name?")), "  pratham   rathore ")
    assert result["customer_name"] == "Pratham Rathore"


def test_name_from_earlier_prompt_reply_survives_later_turns():
    history = entries(
        ("bot", NAME_PROMPT),
        ("user", "pratham rathore"),
        ("bot", "Hi Pratham Rathore! When would you like your trip to start?"),
    )
    result = run(NameExtractor(), history, "23/06/2026")
    assert result["customer_name"] == "Pratham Rathore"


def test_name_from_my_name_is_phrase():
    result = run(NameExtractor(), entries(("user", "hello")), "my name is john smith")
    assert result["customer_name"] == "John Smith"


def test_name_requires_two_words():
    assert run(NameExtractor(), [], "I am ready") is None


def test_name_rejects_package_name():
    assert run(NameExtractor(), [], "Tell me about Bali Explorer") is None


def test_name_first_match_wins():
    history = entries(("user", "I am Asha Verma"), ("user", "my friend is Ravi Kumar"))
    result = run(NameExtractor(), history, "ok")
    assert result["customer_name"] == "Asha Verma"


# ---------------- Dates ----------------

def test_numeric_and_month_name_dates_normalize_to_same_day():
    extractor = DateExtractor()
    assert extractor.find_dates("23/06/2026") == [date(2026, 6, 23)]
    assert extractor.find_dates("June 23, 2026") == [date(2026, 6, 23)]
    assert extractor.find_dates("23rd June 2026") == [date(2026, 6, 23)]


def test_day_of_month_literal():
    assert DateExtractor().find_dates("12th of September 2026") == [date(2026, 9, 12)]


def test_iso_literal():
    assert DateExtractor().find_dates("leaving 2026-07-01") == [date(2026, 7, 1)]


def test_month_first_when_both_parts_fit():
    assert DateExtractor().find_dates("10/03/2026") == [date(2026, 10, 3)]


def test_impossible_date_is_ignored():
    assert DateExtractor().find_dates("31/02/2026") == []


def test_earliest_date_is_start_and_end_is_derived():
    history = entries(("user", "maybe 20/07/2026"), ("user", "or 15/07/2026"))
    result = run(DateExtractor(), history, "ok")
    assert result["start_date"] == "2026-07-15"
    assert result["end_date"] == "2026-07-20"


def test_single_date_with_return_hint_is_end_date():
    result = run(DateExtractor(), [], "we return on 20/07/2026")
    assert result["end_date"] == "2026-07-20"


def test_no_dates():
    assert run(DateExtractor(), entries(("user", "hello")), "soon") is None


# ---------------- Party size ----------------

def test_party_size_reply_to_people_prompt():
    result = run(PartySizeExtractor(), entries(("bot", PEOPLE_PROMPT)), "8")
    assert result["number_of_people"] == "8"
    assert result["method"] == "prompt_reply"


def test_party_size_out_of_range_reply_is_ignored():
    assert run(PartySizeExtractor(), entries(("bot", PEOPLE_PROMPT)), "25") is None


def test_party_size_last_match_wins():
    history = entries(("user", "we are 4 people"))
    result = run(PartySizeExtractor(), history, "actually 6 people")
    assert result["number_of_people"] == "6"


def test_party_size_never_taken_from_date():
    history = entries(("user", "I want to travel on 10/03/2026"))
    assert run(PartySizeExtractor(), history, "ok") is None


def test_party_size_fallback_to_recent_standalone_number():
    history = entries(("user", "23/06/2026"))
    result = run(PartySizeExtractor(), history, "8")
    assert result["number_of_people"] == "8"
    assert result["method"] == "recent_number"


# ---------------- Email, package, preferences, budget ----------------

def test_first_email_wins():
    history = entries(("user", "mail me at asha@example.com"))
    result = run(EmailExtractor(), history, "or asha.work@example.org")
    assert result["email"] == "asha@example.com"


def test_email_reply_to_email_prompt():
    history = entries(("user", "old@example.com"), ("bot", "What is your email?"))
    result = run(EmailExtractor(), history, "new@example.com")
    assert result["email"] == "new@example.com"


def test_package_keyword_selects_live_package():
    result = run(PackageExtractor(), entries(("user", "tell me about bali")), "ok")
    assert result["package"] == "Bali Explorer (P001)"
    assert result["destination"] == "Bali, Indonesia"


def test_no_package_without_keyword():
    assert run(PackageExtractor(), [], "somewhere warm") is None


def test_preferences_joined_in_keyword_order():
    result = run(PreferenceExtractor(), entries(("user", "we love food")), "and the beach")
    assert result["preferences"] == "beach, food"


def test_budget_amount_without_commas():
    result = run(BudgetExtractor(), [], "our budget is 50,000 rs")
    assert result["total_price"] == "50000"


def test_small_numbers_are_not_budgets():
    assert run(BudgetExtractor(), [], "price for 2 people?") is None
