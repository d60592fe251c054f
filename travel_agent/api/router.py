"""
Webhook API Router
"""

from fastapi import APIRouter, Depends

from security import verify_webhook_token
from .endpoints import WebhookEndpoints


def create_webhook_router(orchestrator) -> APIRouter:
    """Create and configure webhook router"""

    router = APIRouter(tags=["Webhooks"])
    endpoints = WebhookEndpoints(orchestrator)
    guarded = [Depends(verify_webhook_token)]

    # WhatsApp Cloud API
    router.get("/webhook")(endpoints.verify_webhook)
    router.post("/webhook")(endpoints.receive_webhook)

    # Backend pushes
    router.post("/webhook/customer-update", dependencies=guarded)(endpoints.customer_update)
    router.post("/webhook/booking-confirmation", dependencies=guarded)(endpoints.booking_confirmation)
    router.post("/webhook/inquiry-response", dependencies=guarded)(endpoints.inquiry_response)
    router.post("/api/webhook/vendor-quote", dependencies=guarded)(endpoints.vendor_quote)

    router.get("/health")(endpoints.health_check)

    return router
