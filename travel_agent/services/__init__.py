from .providers import BaseProvider, GeminiProvider, GroqProvider, OllamaProvider, ProviderChain
from .backend_client import BackendClient
from .transcript_store import TranscriptStore, JsonTranscriptStore, MongoTranscriptStore, create_transcript_store
from .flow_state_store import FlowStateStore, EvictingTTLCache
from .sheets_service import SheetsService
from .whatsapp_service import (
    WhatsAppService,
    MetaWhatsAppService,
    TwilioWhatsAppService,
    create_whatsapp_service
)

__all__ = [
    "BaseProvider",
    "GeminiProvider",
    "GroqProvider",
    "OllamaProvider",
    "ProviderChain",
    "BackendClient",
    "TranscriptStore",
    "JsonTranscriptStore",
    "MongoTranscriptStore",
    "create_transcript_store",
    "FlowStateStore",
    "EvictingTTLCache",
    "SheetsService",
    "WhatsAppService",
    "MetaWhatsAppService",
    "TwilioWhatsAppService",
    "create_whatsapp_service"
]
