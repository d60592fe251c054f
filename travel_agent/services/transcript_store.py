"""
Transcript Store - per-user chat log and vendor quote records
"""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from config import CONVERSATIONS_FILE
from database import conversation_collection, create_indexes
from ..config.settings import AGENT_SETTINGS
from ..models.transcript import TranscriptEntry, QuoteRecord

logger = logging.getLogger(__name__)


class TranscriptStore(ABC):
    """Append-only transcript capped at the most recent entries per user"""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries or AGENT_SETTINGS["max_transcript_entries"]
        self.max_quotes = AGENT_SETTINGS["max_quote_records"]

    # ---------------- Backend hooks ----------------

    @abstractmethod
    def _append(self, user_id: str, record: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def _messages(self, user_id: str) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def _append_quote(self, user_id: str, record: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def _quotes(self, user_id: str) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def delete_conversation(self, user_id: str) -> bool:
        pass

    # ---------------- Operations ----------------

    def add_message(self, user_id: str, message: str, is_bot: bool = False) -> TranscriptEntry:
        entry = TranscriptEntry(message=message, is_bot=is_bot)
        self._append(user_id, entry.to_record())
        return entry

    def get_history(self, user_id: str, limit: Optional[int] = None) -> List[TranscriptEntry]:
        """Most recent entries, oldest first"""
        records = self._messages(user_id)
        if limit:
            records = records[-limit:]
        return [TranscriptEntry.model_validate(record) for record in records]

    def get_context(self, user_id: str, limit: Optional[int] = None) -> str:
        """History as 'User: ...' / 'Bot: ...' lines for provider prompts"""
        limit = limit or AGENT_SETTINGS["context_window_entries"]
        return "\n".join(f"{entry.speaker}: {entry.message}" for entry in self.get_history(user_id, limit))

    def store_quote_data(self, user_id: str, record: QuoteRecord) -> None:
        self._append_quote(user_id, record.model_dump())
        logger.info(f"💾 Stored {len(record.quotes)} quote(s) for {user_id}")

    def get_quote_data(self, user_id: str) -> Optional[QuoteRecord]:
        """Most recently stored QuoteRecord"""
        quotes = self._quotes(user_id)
        if not quotes:
            return None
        return QuoteRecord.model_validate(quotes[-1])


class JsonTranscriptStore(TranscriptStore):
    """Transcript kept in memory and rewritten to a JSON file on every change"""

    def __init__(self, path: str, max_entries: Optional[int] = None):
        super().__init__(max_entries)
        self.path = path
        self.lock = threading.RLock()
        self.conversations: Dict[str, List[Dict[str, Any]]] = {}
        self.quotes: Dict[str, List[Dict[str, Any]]] = {}
        self._load()

    def _load(self) -> None:
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.conversations = data.get("conversations", {})
            self.quotes = data.get("quotes", {})
            logger.info(f"✅ Loaded {len(self.conversations)} conversation(s) from {self.path}")
        except (OSError, ValueError) as e:
            logger.error(f"❌ Error loading conversations from {self.path}: {e}")

    def _save(self) -> None:
        if not self.path:
            return
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"conversations": self.conversations, "quotes": self.quotes}, f, indent=2)
        except OSError as e:
            logger.error(f"❌ Error saving conversations to {self.path}: {e}")

    def _append(self, user_id: str, record: Dict[str, Any]) -> None:
        with self.lock:
            messages = self.conversations.setdefault(user_id, [])
            messages.append(record)
            if len(messages) > self.max_entries:
                self.conversations[user_id] = messages[-self.max_entries:]
            self._save()

    def _messages(self, user_id: str) -> List[Dict[str, Any]]:
        with self.lock:
            return list(self.conversations.get(user_id, []))

    def _append_quote(self, user_id: str, record: Dict[str, Any]) -> None:
        with self.lock:
            records = self.quotes.setdefault(user_id, [])
            records.append(record)
            self.quotes[user_id] = records[-self.max_quotes:]
            self._save()

    def _quotes(self, user_id: str) -> List[Dict[str, Any]]:
        with self.lock:
            return list(self.quotes.get(user_id, []))

    def delete_conversation(self, user_id: str) -> bool:
        with self.lock:
            existed = self.conversations.pop(user_id, None) is not None
            existed = self.quotes.pop(user_id, None) is not None or existed
            if existed:
                self._save()
            return existed


class MongoTranscriptStore(TranscriptStore):
    """One MongoDB document per user: {user_id, messages, quotes, updated_at}"""

    def __init__(self, collection, max_entries: Optional[int] = None):
        super().__init__(max_entries)
        self.collection = collection

    def _push(self, user_id: str, field: str, record: Dict[str, Any], cap: int) -> None:
        self.collection.update_one(
            {"user_id": user_id},
            {
                "$push": {field: {"$each": [record], "$slice": -cap}},
                "$set": {"updated_at": datetime.utcnow()},
            },
            upsert=True
        )

    def _document(self, user_id: str) -> Dict[str, Any]:
        return self.collection.find_one({"user_id": user_id}, {"_id": 0}) or {}

    def _append(self, user_id: str, record: Dict[str, Any]) -> None:
        self._push(user_id, "messages", record, self.max_entries)

    def _messages(self, user_id: str) -> List[Dict[str, Any]]:
        return self._document(user_id).get("messages", [])

    def _append_quote(self, user_id: str, record: Dict[str, Any]) -> None:
        self._push(user_id, "quotes", record, self.max_quotes)

    def _quotes(self, user_id: str) -> List[Dict[str, Any]]:
        return self._document(user_id).get("quotes", [])

    def delete_conversation(self, user_id: str) -> bool:
        result = self.collection.delete_one({"user_id": user_id})
        return result.deleted_count > 0


def create_transcript_store() -> TranscriptStore:
    """MongoDB when MONGO_URI is configured, else the JSON file"""
    if conversation_collection is not None:
        create_indexes(conversation_collection)
        logger.info("✅ Using MongoDB transcript store")
        return MongoTranscriptStore(conversation_collection)

    logger.info(f"✅ Using JSON transcript store at {CONVERSATIONS_FILE}")
    return JsonTranscriptStore(CONVERSATIONS_FILE)
