"""
Webhook API Endpoints
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import BackgroundTasks, HTTPException, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from security import is_valid_verify_token
from ..models.api_models import (
    InboundMessage,
    VendorQuotePayload,
    CustomerUpdatePayload,
    BookingConfirmationPayload,
    InquiryResponsePayload,
    WebhookAck,
)
from ..orchestrator import TravelAgentOrchestrator
from ..utils.formatters import Formatters

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


class WebhookEndpoints:
    """WhatsApp and backend webhook handlers"""

    def __init__(self, orchestrator: TravelAgentOrchestrator):
        """Initialize endpoints"""
        self.orchestrator = orchestrator
        logger.info("WebhookEndpoints initialized")

    # ==================== WhatsApp ====================

    async def verify_webhook(
        self,
        mode: Optional[str] = Query(None, alias="hub.mode"),
        token: Optional[str] = Query(None, alias="hub.verify_token"),
        challenge: Optional[str] = Query(None, alias="hub.challenge"),
    ):
        """Meta subscription handshake"""
        if not mode or not token:
            logger.warning("Webhook verification missing mode or token")
            return PlainTextResponse("Bad Request", status_code=400)

        if mode == "subscribe" and is_valid_verify_token(token):
            logger.info("✅ Webhook verified")
            return PlainTextResponse(challenge or "", status_code=200)

        logger.warning("❌ Webhook verification failed")
        return PlainTextResponse("Forbidden", status_code=403)

    async def receive_webhook(self, request: Request, background_tasks: BackgroundTasks):
        """WhatsApp Cloud API events, or a vendor-quote push on the same URL"""
        try:
            body = await request.json()
        except ValueError:
            return error_response(400, "Invalid JSON body")

        if not isinstance(body, dict):
            return error_response(400, "Invalid webhook payload")

        if body.get("object") == "whatsapp_business_account":
            entries = body.get("entry")
            if not isinstance(entries, list):
                return error_response(400, "Invalid webhook payload: missing entry list")

            messages = self.extract_messages(entries)
            for message in messages:
                self.orchestrator.enqueue(message)
            logger.info(f"📨 Webhook accepted {len(messages)} message(s)")
            return PlainTextResponse("OK", status_code=200)

        if "object" not in body and "quote_request_id" in body and "quotes" in body:
            try:
                payload = VendorQuotePayload.model_validate(body)
            except ValidationError as e:
                logger.warning(f"Quote push rejected: {self._validation_message(e)}")
                return PlainTextResponse("OK", status_code=200)
            background_tasks.add_task(self._push_quotes, payload)
            logger.info(f"📨 Quote push accepted for request {payload.quote_request_id}")
            return PlainTextResponse("OK", status_code=200)

        logger.info(f"Webhook event ignored: {str(body)[:200]}")
        return PlainTextResponse("OK", status_code=200)

    @staticmethod
    def extract_messages(entries: List[Dict[str, Any]]) -> List[InboundMessage]:
        """Text messages from entry[].changes[].value.messages[]"""
        messages = []
        for entry in entries:
            for change in (entry or {}).get("changes", []) or []:
                if change.get("field") != "messages":
                    continue
                value = change.get("value") or {}
                for item in value.get("messages", []) or []:
                    if item.get("type", "text") != "text":
                        logger.info(f"Skipping non-text message of type {item.get('type')}")
                        continue
                    body = (item.get("text") or {}).get("body")
                    sender = item.get("from")
                    if not body or not sender:
                        continue
                    messages.append(InboundMessage(
                        sender_id=str(sender),
                        body=body,
                        timestamp=item.get("timestamp"),
                        message_id=item.get("id"),
                    ))
        return messages

    # ==================== Backend ====================

    async def vendor_quote(self, payload: VendorQuotePayload):
        return await self._deliver_quotes(payload)

    async def customer_update(self, payload: CustomerUpdatePayload) -> WebhookAck:
        text = Formatters.format_customer_update(payload.customer_name, payload.update_type, payload.update_data)
        await self._notify(payload.customer_phone, text)
        return WebhookAck(message="Customer notified")

    async def booking_confirmation(self, payload: BookingConfirmationPayload) -> WebhookAck:
        if not payload.resolved_phone:
            raise HTTPException(status_code=400, detail="customer_phone is required")

        text = Formatters.format_booking_confirmation(
            payload.resolved_name or "there",
            payload.travel_date,
            payload.guests,
        )
        await self._notify(payload.resolved_phone, text)
        return WebhookAck(message="Booking confirmation sent")

    async def inquiry_response(self, payload: InquiryResponsePayload) -> WebhookAck:
        text = Formatters.format_inquiry_response(
            payload.customer_name,
            payload.vendor_name,
            payload.response_details,
        )
        await self._notify(payload.customer_phone, text)
        return WebhookAck(message="Inquiry response sent")

    async def health_check(self):
        """Service health, never authenticated"""
        try:
            return self.orchestrator.health()
        except Exception as e:
            logger.error(f"Health check error: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal server error")

    # ==================== Helpers ====================

    async def _deliver_quotes(self, payload: VendorQuotePayload):
        try:
            sent = await self.orchestrator.handle_vendor_quote(payload)
        except Exception as e:
            logger.error(f"❌ Vendor quote handling failed: {e}", exc_info=True)
            return error_response(500, "Internal server error")

        if not sent:
            return error_response(500, "Failed to send WhatsApp message")
        return {"success": True, "message": "Quotes sent to customer"}

    async def _push_quotes(self, payload: VendorQuotePayload) -> None:
        """Deliver a quote push after the webhook was acknowledged"""
        try:
            sent = await self.orchestrator.handle_vendor_quote(payload)
        except Exception as e:
            logger.error(f"❌ Quote push handling failed: {e}", exc_info=True)
            return
        if not sent:
            logger.error(f"❌ Quote push {payload.quote_request_id} not delivered to customer")

    async def _notify(self, phone: str, text: str) -> None:
        try:
            sent = await self.orchestrator.notify_customer(phone, text)
        except Exception as e:
            logger.error(f"❌ Customer notification failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal server error")
        if not sent:
            raise HTTPException(status_code=500, detail="Failed to send WhatsApp message")

    @staticmethod
    def _validation_message(error: ValidationError) -> str:
        return "; ".join(
            f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" if item['loc'] else item['msg']
            for item in error.errors()
        )
