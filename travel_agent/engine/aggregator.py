"""
Booking State Aggregator - merges every extractor's output into one BookingState
"""

import re
import logging
from typing import List, Optional, Sequence, Tuple

from cachetools import LRUCache

from ..extractors import (
    BaseExtractor,
    ConversationView,
    NameExtractor,
    PackageExtractor,
    DateExtractor,
    PartySizeExtractor,
    EmailExtractor,
    PreferenceExtractor,
    BudgetExtractor,
)
from ..extractors.party_size_extractor import in_party_range, strip_dates
from ..models.booking import BookingState
from ..models.transcript import TranscriptEntry
from ..utils.patterns import CORRECTION_NUMBER_PATTERN, FIRST_NUMBER_PATTERN

logger = logging.getLogger(__name__)


class BookingAggregator:
    """Recomputes the booking from the whole transcript on every turn.

    Results are memoized per (user, transcript tail, message) so repeated
    lookups in the same turn do not rescan the transcript.
    """

    def __init__(self, extractors: Optional[List[BaseExtractor]] = None, cache_size: int = 256):
        self.extractors = extractors or [
            NameExtractor(),
            PackageExtractor(),
            DateExtractor(),
            PartySizeExtractor(),
            EmailExtractor(),
            PreferenceExtractor(),
            BudgetExtractor(),
        ]
        self._memo: LRUCache = LRUCache(maxsize=cache_size)

    def aggregate(self, user_id: str, history: Sequence[TranscriptEntry], current_message: str) -> BookingState:
        """Build the BookingState for a user; never raises"""
        key = self._memo_key(user_id, history, current_message)
        cached = self._memo.get(key)
        if cached is not None:
            return cached.model_copy()

        context = ConversationView(history, current_message)
        fields = {}

        for extractor in self.extractors:
            try:
                result = extractor.extract(context.current_message, context)
            except Exception as e:
                logger.error(f"❌ {type(extractor).__name__} failed for {user_id}: {e}", exc_info=True)
                continue
            if not result:
                continue
            for name, value in result.items():
                if name in BookingState.model_fields:
                    fields[name] = value

        booking = BookingState(**fields)
        booking = self.apply_correction(booking, context.current_message)

        logger.debug(f"📋 Booking state for {user_id}: {booking.get_summary()}")
        self._memo[key] = booking
        return booking.model_copy()

    @staticmethod
    def apply_correction(booking: BookingState, message: str) -> BookingState:
        """'no ...' with a number overwrites the party size once the booking is otherwise complete"""
        lowered = (message or "").lower().strip()
        if not lowered.startswith('no'):
            return booking
        if not booking.is_complete(BookingState.SHEET_REQUIRED_FIELDS):
            return booking

        text = strip_dates(lowered)
        match = re.search(CORRECTION_NUMBER_PATTERN, text) or re.search(FIRST_NUMBER_PATTERN, text)
        if not match:
            return booking

        value = int(match.group(1))
        if not in_party_range(value):
            return booking

        logger.info(f"✏️ Party size corrected to {value}")
        return booking.model_copy(update={'number_of_people': str(value)})

    @staticmethod
    def _memo_key(user_id: str, history: Sequence[TranscriptEntry], message: str) -> Tuple:
        tail = (history[-1].timestamp, history[-1].message, history[-1].is_bot) if history else None
        return (user_id, len(history), tail, message)
