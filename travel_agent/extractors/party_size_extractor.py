"""
Party Size Extractor - number of travellers
"""

import re
from typing import Optional, Dict, Any, List, Tuple

from .base_extractor import BaseExtractor, ConversationView
from ..config.settings import AGENT_SETTINGS
from ..utils.patterns import (
    PEOPLE_PATTERNS,
    DATE_PATTERNS,
    DATE_CONTEXT_PATTERN,
    CURRENCY_CONTEXT_PATTERN,
    TIME_CONTEXT_PATTERN,
    PARTY_CONTEXT_CHARS,
    STANDALONE_NUMBER_PATTERN,
    FIRST_NUMBER_PATTERN,
    GUESTS_PROMPT_CUES,
)

RECENT_USER_MESSAGES = 5


def in_party_range(value: int) -> bool:
    return AGENT_SETTINGS["min_party_size"] <= value <= AGENT_SETTINGS["max_party_size"]


def strip_dates(text: str) -> str:
    """Blank out date literals so their digits never count as party sizes"""
    for pattern in DATE_PATTERNS.values():
        text = re.sub(pattern, ' ', text, flags=re.IGNORECASE)
    return text


def is_guests_question(bot_message: str) -> bool:
    """Bot asked how many people are travelling"""
    lowered = (bot_message or "").lower()
    if 'how many' in lowered and 'people' in lowered:
        return True
    return any(cue in lowered for cue in GUESTS_PROMPT_CUES)


class PartySizeExtractor(BaseExtractor):
    """Extract the number of travellers; the last valid match in the transcript wins"""

    field_name = "number_of_people"

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        if is_guests_question(context.last_bot_message):
            value = self.first_number(message)
            if value is not None:
                return self.build_result('prompt_reply', number_of_people=str(value))

        candidates = self.pattern_candidates(context.full_text.lower())
        if candidates:
            return self.build_result('pattern', number_of_people=str(candidates[-1]))

        value = self._recent_standalone_number(context.user_messages_with_current)
        if value is not None:
            return self.build_result('recent_number', number_of_people=str(value))
        return None

    @staticmethod
    def first_number(text: str) -> Optional[int]:
        """First 1-2 digit number outside any date literal, if it is a valid party size"""
        match = re.search(FIRST_NUMBER_PATTERN, strip_dates(text or ""))
        if match and in_party_range(int(match.group(1))):
            return int(match.group(1))
        return None

    def pattern_candidates(self, text: str) -> List[int]:
        """Valid candidates from every pattern, in transcript order"""
        found: List[Tuple[int, int]] = []
        for pattern in PEOPLE_PATTERNS:
            for match in re.finditer(pattern, text):
                value = int(match.group(1))
                if not in_party_range(value):
                    continue
                if self._in_excluded_context(text, match):
                    continue
                found.append((match.start(1), value))
        found.sort(key=lambda item: item[0])
        return [value for _, value in found]

    @staticmethod
    def _in_excluded_context(text: str, match: re.Match) -> bool:
        """Numbers next to a date, a currency or a clock time are not party sizes"""
        before = text[max(0, match.start() - PARTY_CONTEXT_CHARS):match.start()]
        after = text[match.end():match.end() + PARTY_CONTEXT_CHARS]
        window = before + match.group(0) + after

        if re.search(DATE_CONTEXT_PATTERN, window):
            return True
        if re.search(CURRENCY_CONTEXT_PATTERN, before + " " + after):
            return True
        return bool(re.search(TIME_CONTEXT_PATTERN, window))

    def _recent_standalone_number(self, user_messages: List[str]) -> Optional[int]:
        """Last standalone number in the most recent user messages, ignoring dates"""
        value = None
        for text in user_messages[-RECENT_USER_MESSAGES:]:
            for match in re.finditer(STANDALONE_NUMBER_PATTERN, strip_dates(text)):
                number = int(match.group(1))
                if in_party_range(number):
                    value = number
        return value
