# test_intent_classifier.py

import pytest

from travel_agent.engine.intent_classifier import IntentClassifier, package_topic, normalize
from travel_agent.models.intent import Intent


@pytest.fixture
def classifier():
    return IntentClassifier()


@pytest.mark.parametrize("message, expected", [
    ("Hi!", Intent.GREETING),
    ("good morning", Intent.GREETING),
    ("Finalize.", Intent.FINALIZE),
    ("finalise", Intent.FINALIZE),
    ("book", Intent.BOOK_TRIP),
    ("Book my trip", Intent.BOOK_TRIP),
    ("book my trip now", Intent.BOOK_TRIP_NOW),
    ("what are the prices?", Intent.PRICE_INQUIRY),
    ("do I need a visa", Intent.TRAVEL_DOCUMENT_QUESTION),
    ("I want to book a trip", Intent.BOOKING_INFO),
    ("thanks", Intent.FALLBACK),
])
def test_classify(classifier, message, expected):
    assert classifier.classify(message) == expected


def test_package_question_needs_selected_package(classifier):
    """Without a package, hotel questions are not package questions"""
    assert classifier.classify("which hotel do we stay in") == Intent.FALLBACK
    assert classifier.classify("which hotel do we stay in", package_selected=True) == Intent.PACKAGE_QUESTION


def test_price_wins_over_package_question(classifier):
    assert classifier.classify("what is the price of the hotel", package_selected=True) == Intent.PRICE_INQUIRY


def test_commands_are_exact_matches(classifier):
    """A command inside a longer sentence is not the command"""
    assert classifier.classify("please finalize my booking") == Intent.BOOKING_INFO


@pytest.mark.parametrize("message", [
    "we are traveling in june",
    "Travelling with family",
    "already booked flights",
    "starting next week",
])
def test_keywords_match_inside_words(classifier, message):
    assert classifier.classify(message) == Intent.BOOKING_INFO


def test_package_topics():
    assert package_topic("Is breakfast included?") == "food"
    assert package_topic("which resort is it") == "accommodation"
    assert package_topic("what can we visit nearby") == "attractions"
    assert package_topic("hello") is None


def test_normalize():
    assert normalize("  Book   My Trip!! ") == "book my trip"
