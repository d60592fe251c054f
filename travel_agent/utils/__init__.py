"""
Utils Package
"""

from .errors import (
    TravelAgentError,
    ProviderError,
    AllProvidersFailedError,
    TransportError,
    BackendError
)
from .formatters import Formatters
from .helpers import normalize_phone, title_case, truncate, mask_phone
from .retry import retry_with_backoff, backoff_delay

__all__ = [
    "TravelAgentError",
    "ProviderError",
    "AllProvidersFailedError",
    "TransportError",
    "BackendError",
    "Formatters",
    "normalize_phone",
    "title_case",
    "truncate",
    "mask_phone",
    "retry_with_backoff",
    "backoff_delay"
]
