"""
WhatsApp Service - outbound transports (Meta Cloud API or Twilio)
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp
from twilio.rest import Client

from config import (
    WHATSAPP_PROVIDER,
    WHATSAPP_TOKEN,
    PHONE_NUMBER_ID,
    WHATSAPP_API_VERSION,
    TWILIO_ACCOUNT_SID,
    TWILIO_AUTH_TOKEN,
    TWILIO_WHATSAPP_FROM,
)
from ..config.settings import RETRY_SETTINGS
from ..utils.errors import TransportError
from ..utils.helpers import mask_phone

logger = logging.getLogger(__name__)

GRAPH_API_URL = "https://graph.facebook.com/{version}/{phone_number_id}/messages"


class WhatsAppService(ABC):
    """send(recipient, text) -> {message_id, status}; raises TransportError"""

    name = "whatsapp"

    @abstractmethod
    async def send(self, recipient: str, text: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        pass


class MetaWhatsAppService(WhatsAppService):
    """WhatsApp Cloud API through the Graph API"""

    name = "meta"

    def __init__(
        self,
        token: Optional[str] = WHATSAPP_TOKEN,
        phone_number_id: Optional[str] = PHONE_NUMBER_ID,
        api_version: str = WHATSAPP_API_VERSION,
        timeout: Optional[float] = None,
    ):
        self.token = token
        self.phone_number_id = phone_number_id
        self.api_version = api_version
        self.timeout = timeout or RETRY_SETTINGS["default_timeout"]

    def is_ready(self) -> bool:
        return bool(self.token and self.phone_number_id)

    @property
    def url(self) -> str:
        return GRAPH_API_URL.format(version=self.api_version, phone_number_id=self.phone_number_id)

    async def send(self, recipient: str, text: str) -> Dict[str, Any]:
        payload = {
            "messaging_product": "whatsapp",
            "to": recipient,
            "type": "text",
            "text": {"body": text}
        }
        data = await self._post(payload)
        messages = data.get("messages") or [{}]
        message_id = messages[0].get("id")
        logger.info(f"📤 WhatsApp message sent to {mask_phone(recipient)} ({message_id})")
        return {"message_id": message_id, "status": "sent"}

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.is_ready():
            raise TransportError("WhatsApp Cloud API not configured (WHATSAPP_TOKEN / PHONE_NUMBER_ID)")

        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json"
        }
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.url,
                    headers=headers,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise TransportError(f"Graph API error {response.status}: {body[:200]}")
                    return await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise TransportError(f"Graph API timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            raise TransportError(f"Graph API request failed: {e}")


class TwilioWhatsAppService(WhatsAppService):
    """Twilio WhatsApp messaging, run off the event loop"""

    name = "twilio"

    def __init__(
        self,
        account_sid: Optional[str] = TWILIO_ACCOUNT_SID,
        auth_token: Optional[str] = TWILIO_AUTH_TOKEN,
        from_number: Optional[str] = TWILIO_WHATSAPP_FROM,
    ):
        self.from_number = from_number
        try:
            self.client = Client(account_sid, auth_token) if account_sid and auth_token else None
        except Exception as e:
            logger.warning(f"Twilio client initialization failed: {e}")
            self.client = None

    def is_ready(self) -> bool:
        return self.client is not None and bool(self.from_number)

    @staticmethod
    def _address(number: str) -> str:
        number = str(number)
        if number.startswith("whatsapp:"):
            return number
        if not number.startswith("+"):
            number = f"+{number}"
        return f"whatsapp:{number}"

    async def send(self, recipient: str, text: str) -> Dict[str, Any]:
        if not self.is_ready():
            raise TransportError("Twilio not configured - cannot send WhatsApp message")
        try:
            message = await asyncio.to_thread(
                self.client.messages.create,
                from_=self._address(self.from_number),
                to=self._address(recipient),
                body=text
            )
        except Exception as e:
            raise TransportError(f"Twilio send failed for {mask_phone(recipient)}: {e}")
        logger.info(f"📤 WhatsApp message sent to {mask_phone(recipient)} ({message.sid})")
        return {"message_id": message.sid, "status": message.status}


def create_whatsapp_service(provider: str = WHATSAPP_PROVIDER) -> WhatsAppService:
    """Transport selected by WHATSAPP_PROVIDER"""
    if provider == "twilio":
        service = TwilioWhatsAppService()
    else:
        service = MetaWhatsAppService()

    if service.is_ready():
        logger.info(f"✅ WhatsApp transport: {service.name}")
    else:
        logger.warning(f"⚠️ WhatsApp transport {service.name} is not configured")
    return service
