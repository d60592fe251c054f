from .booking import BookingState, derive_end_date
from .intent import Intent
from .state import FlowStage, PerUserFlowState
from .transcript import TranscriptEntry, VendorQuote, QuoteRecord

__all__ = [
    "BookingState",
    "derive_end_date",
    "Intent",
    "FlowStage",
    "PerUserFlowState",
    "TranscriptEntry",
    "VendorQuote",
    "QuoteRecord"
]
