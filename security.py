import secrets
from typing import Optional

from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import WEBHOOK_AUTH_TOKEN, WHATSAPP_VERIFY_TOKEN

# ----------------------
# Security Setup
# ----------------------
security = HTTPBearer(auto_error=False)

# ----------------------
# Token Checks
# ----------------------

def tokens_match(provided: Optional[str], expected: Optional[str]) -> bool:
    """Constant-time comparison; a missing token never matches"""
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def is_valid_verify_token(token: Optional[str]) -> bool:
    """WhatsApp webhook subscription token"""
    return tokens_match(token, WHATSAPP_VERIFY_TOKEN)

# ----------------------
# Authentication Dependency
# ----------------------

def verify_webhook_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> None:
    """Bearer token guard for backend webhooks; open when no token is configured"""
    if not WEBHOOK_AUTH_TOKEN:
        return

    if credentials is None or not tokens_match(credentials.credentials, WEBHOOK_AUTH_TOKEN):
        raise HTTPException(status_code=401, detail="Unauthorized")
