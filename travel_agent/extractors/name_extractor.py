"""
Name Extractor - customer full name from prompt replies or free text
"""

import re
from typing import Optional, Dict, Any, List

from .base_extractor import BaseExtractor, ConversationView
from ..config.packages import LIVE_PACKAGE
from ..utils.helpers import title_case
from ..utils.patterns import NAME_PATTERNS, NAME_PROMPT_CUES, GREETINGS


class NameExtractor(BaseExtractor):
    """Extract the customer's name; first valid match wins"""

    field_name = "customer_name"

    # Words that are NOT names
    EXCLUDED_WORDS = [
        'bali', 'explorer', 'indonesia', 'package', 'book', 'booking', 'trip',
        'travel', 'ready', 'finalize', 'finalise', 'price', 'cost', 'quote',
        'visa', 'passport', 'hotel', 'beach', 'people', 'person', 'date',
        'interested', 'looking', 'planning', 'going', 'thinking', 'not', 'sure',
        'thanks', 'thank', 'please', 'yes', 'okay', 'good', 'morning',
        'afternoon', 'evening', 'fine', 'here', 'there',
    ] + GREETINGS

    # Trailing words dropped from a captured phrase ("John Smith and ...")
    CONNECTOR_WORDS = [
        'and', 'from', 'with', 'for', 'to', 'in', 'at', 'on', 'of', 'by',
        'i', 'we', 'my', 'is', 'am', 'are', 'the', 'a', 'an',
    ]

    MIN_WORDS = 2

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        """Extract name from the current reply or from all user text"""
        if context.is_replying_to(NAME_PROMPT_CUES):
            name = self._from_prompt_reply(message)
            if name:
                return self.build_result('prompt_reply', customer_name=name)

        # Earlier answers to a name prompt, most recent first
        for reply in reversed(context.prompted_replies(NAME_PROMPT_CUES)):
            name = self._from_prompt_reply(reply)
            if name:
                return self.build_result('prompt_history', customer_name=name)

        name = self._from_patterns(context.user_messages_with_current)
        if name:
            return self.build_result('pattern', customer_name=name)
        return None

    def _from_prompt_reply(self, text: str) -> Optional[str]:
        """The whole reply is the name, title-cased"""
        if not re.search(r'[A-Za-z]', text or ''):
            return None
        return title_case(text)

    def _from_patterns(self, messages: List[str]) -> Optional[str]:
        """Patterns in priority order, each scanned message by message"""
        for pattern in NAME_PATTERNS:
            for text in messages:
                for match in re.finditer(pattern, text):
                    candidate = self._clean_candidate(match.group(1))
                    if candidate and self._is_valid(candidate):
                        return candidate
        return None

    def _clean_candidate(self, raw: str) -> str:
        words = title_case(raw).split(' ')
        while words and words[-1].lower() in self.CONNECTOR_WORDS:
            words.pop()
        return ' '.join(words)

    def _is_valid(self, candidate: str) -> bool:
        words = candidate.lower().split()
        if len(words) < self.MIN_WORDS:
            return False
        if candidate.lower() in (LIVE_PACKAGE['name'].lower(), 'bali explorer'):
            return False
        return not any(word in self.EXCLUDED_WORDS for word in words)
