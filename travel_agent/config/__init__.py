"""
Config Package - Exports all configurations
"""

from .packages import (
    LIVE_PACKAGE,
    DESTINATION_KEYWORDS,
    PACKAGE_QUESTION_TOPICS,
    load_packages,
    format_package_context
)
from .settings import (
    AGENT_SETTINGS,
    LLM_SETTINGS,
    RETRY_SETTINGS,
    LOGGING_CONFIG
)

__all__ = [
    "LIVE_PACKAGE",
    "DESTINATION_KEYWORDS",
    "PACKAGE_QUESTION_TOPICS",
    "load_packages",
    "format_package_context",
    "AGENT_SETTINGS",
    "LLM_SETTINGS",
    "RETRY_SETTINGS",
    "LOGGING_CONFIG"
]
