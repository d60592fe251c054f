"""
Intent Classifier - ordered keyword rules, first match wins
"""

import re
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..config.packages import PACKAGE_QUESTION_TOPICS
from ..models.intent import Intent
from ..utils.patterns import (
    GREETINGS,
    INTENT_KEYWORDS,
    FINALIZE_COMMANDS,
    BOOK_TRIP_COMMANDS,
    BOOK_TRIP_NOW_COMMANDS,
)

logger = logging.getLogger(__name__)

# (text, package_selected) -> matched
Predicate = Callable[[str, bool], bool]


def normalize(message: str) -> str:
    """Lowercase, collapse whitespace, drop trailing punctuation"""
    text = re.sub(r'\s+', ' ', (message or '').lower()).strip()
    return text.rstrip('!.?,;: ')


def contains_keyword(text: str, keywords: Sequence[str]) -> bool:
    """Case-folded substring match; text is already normalized"""
    return any(keyword in text for keyword in keywords)


def package_topic(message: str) -> Optional[str]:
    """Sub-topic of a package question, or None"""
    text = normalize(message)
    for topic, keywords in PACKAGE_QUESTION_TOPICS.items():
        if contains_keyword(text, keywords):
            return topic
    return None


def exact(commands: Sequence[str]) -> Predicate:
    return lambda text, _: text in commands


def keywords(name: str) -> Predicate:
    return lambda text, _: contains_keyword(text, INTENT_KEYWORDS[name])


def is_greeting(text: str, _: bool) -> bool:
    return text in GREETINGS


def is_package_question(text: str, package_selected: bool) -> bool:
    return package_selected and package_topic(text) is not None


# Precedence is the list order
INTENT_RULES: List[Tuple[Predicate, Intent]] = [
    (is_greeting, Intent.GREETING),
    (keywords("price_inquiry"), Intent.PRICE_INQUIRY),
    (exact(FINALIZE_COMMANDS), Intent.FINALIZE),
    (exact(BOOK_TRIP_COMMANDS), Intent.BOOK_TRIP),
    (exact(BOOK_TRIP_NOW_COMMANDS), Intent.BOOK_TRIP_NOW),
    (keywords("travel_document"), Intent.TRAVEL_DOCUMENT_QUESTION),
    (is_package_question, Intent.PACKAGE_QUESTION),
    (keywords("booking_info"), Intent.BOOKING_INFO),
]


class IntentClassifier:
    """Classify a message by evaluating the rules in order"""

    def __init__(self, rules: Optional[List[Tuple[Predicate, Intent]]] = None):
        self.rules = rules or INTENT_RULES

    def classify(self, message: str, package_selected: bool = False) -> Intent:
        text = normalize(message)
        for predicate, intent in self.rules:
            if predicate(text, package_selected):
                logger.debug(f"🧭 Intent {intent.value} for '{text[:50]}'")
                return intent
        return Intent.FALLBACK
