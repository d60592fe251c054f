"""
Agent, LLM, retry and logging settings
"""

from config import LOG_LEVEL

# Agent settings
AGENT_SETTINGS = {
    "max_transcript_entries": 50,
    "max_quote_records": 10,
    "context_window_entries": 20,
    "conversation_summary_chars": 500,
    "flow_state_ttl_seconds": 30 * 60,
    "flow_state_max_users": 1000,
    "apology_guard_seconds": 5 * 60,
    "min_party_size": 1,
    "max_party_size": 20,
    "trip_length_days": 5,
}

# LLM settings
LLM_SETTINGS = {
    "timeout": 15,
    "temperature": 0.7,
    "max_tokens": 1000,
    "gemini_api_url": "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
    "groq_api_url": "https://api.groq.com/openai/v1/chat/completions",
    "log_prompt_chars": 200,
}

# Backend retry settings, one entry per retried operation
RETRY_SETTINGS = {
    "default_timeout": 5,
    "booking_email": {
        "max_attempts": 3,
        "base_delay": 1.0,
        "max_delay": 5.0,
        "timeout": 15,
    },
    "daywise_booking_email": {
        "max_attempts": 5,
        "base_delay": 2.0,
        "max_delay": 15.0,
        "timeout": 30,
    },
}

# Logging Configuration
LOGGING_CONFIG = {
    "level": LOG_LEVEL,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
