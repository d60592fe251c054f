"""
Email Extractor
"""

from typing import Optional, Dict, Any

from .base_extractor import BaseExtractor, ConversationView
from ..utils.patterns import EMAIL_PATTERN, EMAIL_PROMPT_CUES


class EmailExtractor(BaseExtractor):
    """Extract an email address; the first one a user wrote wins"""

    field_name = "email"

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        if context.is_replying_to(EMAIL_PROMPT_CUES):
            email = self.find_pattern(message, EMAIL_PATTERN)
            if email:
                return self.build_result('prompt_reply', email=email)

        for text in context.user_messages_with_current:
            email = self.find_pattern(text, EMAIL_PATTERN)
            if email:
                return self.build_result('user_text', email=email)
        return None
