"""
Base Extractor - Abstract base class for all booking field extractors
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
import re
import logging

from ..models.transcript import TranscriptEntry

logger = logging.getLogger(__name__)


class ConversationView:
    """Read-only views over a transcript plus the message being processed.

    The current message is never part of ``history``; it has not been stored yet.
    """

    def __init__(self, history: Sequence[TranscriptEntry], current_message: str):
        self.history = list(history)
        self.current_message = current_message or ""

    @property
    def user_messages(self) -> List[str]:
        """User-authored history, oldest first"""
        return [entry.message for entry in self.history if not entry.is_bot]

    @property
    def user_messages_with_current(self) -> List[str]:
        return self.user_messages + [self.current_message]

    @property
    def full_text(self) -> str:
        """Every message, user and bot, followed by the current message"""
        return " ".join([entry.message for entry in self.history] + [self.current_message])

    @property
    def last_bot_message(self) -> str:
        for entry in reversed(self.history):
            if entry.is_bot:
                return entry.message
        return ""

    def is_replying_to(self, cues: Sequence[str]) -> bool:
        """Whether the previous bot message contains any of the cues"""
        last = self.last_bot_message.lower()
        return bool(last) and any(cue in last for cue in cues)

    def prompted_replies(self, cues: Sequence[str]) -> List[str]:
        """User messages in history that directly answered a bot message carrying a cue"""
        replies = []
        previous_bot = ""
        for entry in self.history:
            if entry.is_bot:
                previous_bot = entry.message.lower()
            elif previous_bot and any(cue in previous_bot for cue in cues):
                replies.append(entry.message)
                previous_bot = ""
        return replies


class BaseExtractor(ABC):
    """Base class for all field extractors with common utilities.

    Extractors are independent and idempotent: the same view always
    gives the same result.
    """

    # Name of the extractor for logs
    field_name: str = "field"

    def __init__(self):
        """Initialize base extractor"""
        self.logger = logger

    @abstractmethod
    def extract(self, message: str, context: ConversationView) -> Optional[Dict[str, Any]]:
        """
        Extract booking fields

        Args:
            message: The current inbound message
            context: Transcript views, including the current message

        Returns:
            Dictionary of BookingState field values plus a 'method' key,
            or None if nothing was found
        """
        pass

    def find_pattern(self, text: str, pattern: str, flags: int = re.IGNORECASE) -> Optional[str]:
        """First capture group (or whole match) of pattern in text"""
        match = re.search(pattern, text, flags)
        if not match:
            return None
        return match.group(1) if match.groups() else match.group(0)

    def build_result(self, method: str, **fields: str) -> Dict[str, Any]:
        """Build the standard result dictionary"""
        result: Dict[str, Any] = dict(fields)
        result['method'] = method
        self.log_extraction(result)
        return result

    def log_extraction(self, result: Dict[str, Any]) -> None:
        values = {k: v for k, v in result.items() if k != 'method'}
        self.logger.debug(f"🎯 {self.field_name} extracted via {result.get('method')}: {values}")
