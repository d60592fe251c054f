"""
Date Extractor - trip start/end dates from the whole transcript
"""

import re
from datetime import date
from typing import Optional, Dict, Any, List

from dateutil import parser as date_parser

from .base_extractor import BaseExtractor, ConversationView
from ..models.booking import derive_end_date
from ..utils.patterns import DATE_PATTERNS

END_DATE_HINT = r'\b(end|to|return)\b'


class DateExtractor(BaseExtractor):
    """Extract and normalize date literals to YYYY-MM-DD.

    The earliest date in the transcript is the start date; the end date is
    derived from it. A lone date in a message that talks about the end or
    return of the trip is taken as the end date as well.
    """

    field_name = "dates"

    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        dates = self.find_dates(context.full_text)
        if not dates:
            return None

        dates.sort()
        start = dates[0].isoformat()

        if len(dates) == 1 and re.search(END_DATE_HINT, message.lower()):
            return self.build_result('single_end_date', start_date=start, end_date=start)

        return self.build_result('earliest', start_date=start, end_date=derive_end_date(start))

    def find_dates(self, text: str) -> List[date]:
        """Every parsable date literal in text, in pattern order"""
        found = []
        for kind, pattern in DATE_PATTERNS.items():
            for match in re.finditer(pattern, text, re.IGNORECASE):
                parsed = self.parse_literal(kind, match.group(1))
                if parsed:
                    found.append(parsed)
        return found

    def parse_literal(self, kind: str, literal: str) -> Optional[date]:
        """Normalize one literal; None when it is not a real calendar date"""
        try:
            if kind == 'iso':
                year, month, day = (int(part) for part in re.split(r'[-/]', literal))
                return date(year, month, day)
            if kind == 'numeric':
                return self._parse_numeric(literal)
            # Month-name forms: "12th of September 2026", "12 Sep 2026", "September 12, 2026"
            return date_parser.parse(literal, dayfirst=True).date()
        except (ValueError, OverflowError) as e:
            self.logger.debug(f"Unparsable date literal '{literal}': {e}")
            return None

    @staticmethod
    def _parse_numeric(literal: str) -> date:
        part1, part2, year = (int(part) for part in re.split(r'[-/]', literal))
        if part1 <= 12 and part2 <= 31:
            return date(year, part1, part2)
        if part2 <= 12:
            return date(year, part2, part1)
        raise ValueError(f"no month in {literal}")
