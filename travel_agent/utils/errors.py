"""
Exception hierarchy for the travel agent
"""

from typing import List


class TravelAgentError(Exception):
    """Base exception for all travel agent errors"""


class ProviderError(TravelAgentError):
    """A text-generation provider failed (error status, empty body, timeout)"""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class AllProvidersFailedError(ProviderError):
    """Every provider in the chain failed"""

    def __init__(self, errors: List[ProviderError]):
        self.errors = errors
        detail = "; ".join(str(e) for e in errors) or "no providers configured"
        super().__init__("chain", detail)


class TransportError(TravelAgentError):
    """Outbound WhatsApp message could not be delivered"""


class BackendError(TravelAgentError):
    """Backend HTTP call failed"""
