from .router import create_webhook_router
from .endpoints import WebhookEndpoints

__all__ = ["create_webhook_router", "WebhookEndpoints"]
