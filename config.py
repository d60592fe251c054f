import os
from dotenv import load_dotenv

# Load Environment Variables
load_dotenv()

# ----------------------
# Greeting
# ----------------------
GREETING_MESSAGE = os.getenv("GREETING_MESSAGE", "Welcome to Unravel Experience!")
COMPANY_NAME = "Unravel Experience"

# ----------------------
# Text Generation Providers
# ----------------------
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "gemma2-9b-it")

OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama2")

# ----------------------
# Backend
# ----------------------
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

# ----------------------
# Storage
# ----------------------
CONVERSATIONS_FILE = os.getenv("CONVERSATIONS_FILE", "./conversations.json")
MONGO_URI = os.getenv("MONGO_URI")
TRAVEL_PACKAGES_FILE = os.getenv("TRAVEL_PACKAGES_FILE")

# ----------------------
# Google Sheets
# ----------------------
GOOGLE_SHEETS_ID = os.getenv("GOOGLE_SHEETS_ID")
GOOGLE_SERVICE_ACCOUNT_KEY_FILE = os.getenv(
    "GOOGLE_SERVICE_ACCOUNT_KEY_FILE", "./google-service-account.json"
)

# ----------------------
# WhatsApp Transport
# ----------------------
WHATSAPP_PROVIDER = os.getenv("WHATSAPP_PROVIDER", "meta").lower()
WHATSAPP_TOKEN = os.getenv("WHATSAPP_TOKEN")
PHONE_NUMBER_ID = os.getenv("PHONE_NUMBER_ID")
WHATSAPP_API_VERSION = os.getenv("WHATSAPP_API_VERSION", "v22.0")

# Twilio (alternative transport)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_WHATSAPP_FROM = os.getenv("TWILIO_WHATSAPP_FROM")

# ----------------------
# Webhooks
# ----------------------
WEBHOOK_PORT = int(os.getenv("WEBHOOK_PORT", "3001"))
WEBHOOK_AUTH_TOKEN = os.getenv("WEBHOOK_AUTH_TOKEN")
WHATSAPP_VERIFY_TOKEN = os.getenv("WHATSAPP_VERIFY_TOKEN", WEBHOOK_AUTH_TOKEN)
EXECUTIVE_PHONE = os.getenv("EXECUTIVE_PHONE")

# ----------------------
# Logging
# ----------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ----------------------
# CORS Origins
# ----------------------
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
