"""
Booking State Model - fields extracted from a WhatsApp conversation
"""

from datetime import date, timedelta
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, field_validator

from ..config.settings import AGENT_SETTINGS


class BookingState(BaseModel):
    """Booking fields recomputed from the full transcript on every turn.

    Every field is a string; an empty string means "missing".
    """

    customer_name: str = ""
    package: str = ""
    destination: str = ""
    start_date: str = ""
    end_date: str = ""
    number_of_people: str = ""
    email: str = ""
    preferences: str = ""
    total_price: str = ""

    # Required while collecting details in chat (NOT model fields)
    REQUIRED_FIELDS: ClassVar[List[str]] = [
        'customer_name',
        'start_date',
        'number_of_people',
    ]

    # Required before a booking row is appended to the spreadsheet,
    # and before a "no ..." correction is honoured
    SHEET_REQUIRED_FIELDS: ClassVar[List[str]] = [
        'customer_name',
        'package',
        'start_date',
        'end_date',
        'number_of_people',
    ]

    FIELD_LABELS: ClassVar[Dict[str, str]] = {
        'customer_name': 'Name',
        'package': 'Package choice',
        'destination': 'Destination',
        'start_date': 'Start date',
        'end_date': 'End date',
        'number_of_people': 'Number of guests',
        'email': 'Email',
        'preferences': 'Preferences',
        'total_price': 'Budget',
    }

    # ---------------- Validators ----------------

    @field_validator('*', mode='before')
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    # ---------------- Business Logic ----------------

    def missing_fields(self, required: Optional[List[str]] = None) -> List[str]:
        """Required fields that are still empty"""
        fields = required if required is not None else self.REQUIRED_FIELDS
        return [field for field in fields if not getattr(self, field)]

    def is_complete(self, required: Optional[List[str]] = None) -> bool:
        return not self.missing_fields(required)

    def next_missing_field(self) -> Optional[str]:
        """Next field to ask for, in fixed order name -> start date -> party size"""
        missing = self.missing_fields()
        return missing[0] if missing else None

    def with_derived_end_date(self) -> "BookingState":
        """Copy with end_date = start_date + trip length when end_date is absent"""
        if self.end_date or not self.start_date:
            return self.model_copy()
        return self.model_copy(update={'end_date': derive_end_date(self.start_date)})

    def signature(self) -> str:
        """Stable key of the spreadsheet-relevant fields"""
        return "|".join(getattr(self, field) for field in self.SHEET_REQUIRED_FIELDS)

    def get_summary(self) -> Dict[str, str]:
        """Collected fields keyed by display label"""
        return {
            label: getattr(self, field)
            for field, label in self.FIELD_LABELS.items()
            if getattr(self, field)
        }


def derive_end_date(start_date: str) -> str:
    """ISO start date plus the standard trip length; empty string if unparsable"""
    try:
        start = date.fromisoformat(start_date)
    except ValueError:
        return ""
    return (start + timedelta(days=AGENT_SETTINGS["trip_length_days"])).isoformat()
