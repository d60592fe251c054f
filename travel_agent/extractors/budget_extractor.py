"""
Budget Extractor - total price or budget a customer mentions
"""

import re
from typing import Optional, Dict, Any, List, Tuple

from .base_extractor import BaseExtractor, ConversationView
from ..utils.patterns import PRICE_PATTERNS, DATE_PATTERNS


class BudgetExtractor(BaseExtractor):
    """Extract the most recent amount a user mentioned with a price cue"""

    field_name = "total_price"

    # Smaller numbers next to "price" are usually party sizes or days
    MIN_AMOUNT = 100

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        amount = None
        for text in context.user_messages_with_current:
            found = self.amounts(text)
            if found:
                amount = found[-1]
        if amount is None:
            return None
        return self.build_result('pattern', total_price=amount)

    def amounts(self, text: str) -> List[str]:
        """Amounts in one message, in order of appearance, commas removed"""
        lowered = text.lower()
        for pattern in DATE_PATTERNS.values():
            lowered = re.sub(pattern, ' ', lowered, flags=re.IGNORECASE)

        found: List[Tuple[int, str]] = []
        seen = set()
        for pattern in PRICE_PATTERNS:
            for match in re.finditer(pattern, lowered):
                if match.start(1) in seen:
                    continue
                amount = match.group(1).replace(',', '')
                if float(amount) < self.MIN_AMOUNT:
                    continue
                seen.add(match.start(1))
                found.append((match.start(1), amount))
        found.sort(key=lambda item: item[0])
        return [amount for _, amount in found]
