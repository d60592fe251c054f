"""
Preference Extractor
"""

from typing import Optional, Dict, Any

from .base_extractor import BaseExtractor, ConversationView
from ..utils.patterns import PREFERENCE_KEYWORDS


class PreferenceExtractor(BaseExtractor):
    """Every preference keyword mentioned anywhere, in keyword-list order"""

    field_name = "preferences"

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        text = context.full_text.lower()
        found = [keyword for keyword in PREFERENCE_KEYWORDS if keyword in text]
        if not found:
            return None
        return self.build_result('keywords', preferences=', '.join(found))
