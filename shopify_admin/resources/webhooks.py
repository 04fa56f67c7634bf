"""
Webhooks API
See: https://shopify.dev/docs/api/admin-rest/latest/resources/webhook
"""

from ..models import Webhook
from .base import RootResourceService

WEBHOOKS_BASE_PATH = "admin/webhooks"


class WebhookService(RootResourceService[Webhook]):
    """
    Webhook subscription endpoints.

    Usage:
        webhook = await client.webhooks.create(
            Webhook(topic=WebhookTopic.ORDERS_CREATE, address="https://example.com/hooks", format="json")
        )
        hooks = await client.webhooks.list(WebhookOptions(topic="orders/create"))
    """

    model = Webhook
    singular = "webhook"
    plural = "webhooks"
    base_path = WEBHOOKS_BASE_PATH
