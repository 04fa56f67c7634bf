"""
Shopify Webhook Verification
HMAC verification and parsing of webhook deliveries sent to the addresses
registered through the Webhooks API.
"""

import base64
import hashlib
import hmac
import json
import logging
from typing import Mapping

from .exceptions import WebhookVerificationError
from .models import WebhookDelivery

logger = logging.getLogger(__name__)

HMAC_HEADER = "X-Shopify-Hmac-Sha256"
TOPIC_HEADER = "X-Shopify-Topic"
SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"
API_VERSION_HEADER = "X-Shopify-Api-Version"
WEBHOOK_ID_HEADER = "X-Shopify-Webhook-Id"


def verify_webhook_hmac(
    data: bytes,
    hmac_header: str,
    secret: str,
) -> bool:
    """
    Verify Shopify webhook HMAC signature.

    Shopify signs webhooks with HMAC-SHA256 using the app's API secret.
    The signature is base64-encoded and sent in the X-Shopify-Hmac-SHA256 header.

    Args:
        data: Raw request body bytes
        hmac_header: Value of X-Shopify-Hmac-SHA256 header
        secret: Shopify API secret (client secret)

    Returns:
        True if signature is valid

    Raises:
        WebhookVerificationError: If verification fails
    """
    if not hmac_header:
        raise WebhookVerificationError("Missing HMAC header")

    if not secret:
        raise WebhookVerificationError("Missing API secret")

    calculated_hmac = hmac.new(
        secret.encode("utf-8"),
        data,
        hashlib.sha256
    ).digest()
    calculated_b64 = base64.b64encode(calculated_hmac)

    # Constant-time comparison over bytes; the header may hold non-ASCII text
    if not hmac.compare_digest(calculated_b64, hmac_header.strip().encode("utf-8")):
        logger.warning("Webhook HMAC verification failed")
        raise WebhookVerificationError("Invalid HMAC signature")

    return True


def parse_webhook(
    body: bytes,
    headers: Mapping[str, str],
    secret: str,
) -> WebhookDelivery:
    """
    Verify a webhook delivery and decode it.

    Args:
        body: Raw request body bytes
        headers: Request headers (looked up case-insensitively)
        secret: Shopify API secret

    Returns:
        WebhookDelivery with topic, shop domain and JSON payload
    """
    lowered = {k.lower(): v for k, v in headers.items()}

    verify_webhook_hmac(body, lowered.get(HMAC_HEADER.lower(), ""), secret)

    topic = lowered.get(TOPIC_HEADER.lower())
    shop_domain = lowered.get(SHOP_DOMAIN_HEADER.lower())
    if not topic or not shop_domain:
        raise WebhookVerificationError("Missing topic or shop domain header")

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise WebhookVerificationError(f"Invalid webhook payload: {e}") from e

    if not isinstance(payload, dict):
        raise WebhookVerificationError("Webhook payload must be a JSON object")

    logger.debug(f"Verified webhook {topic} from {shop_domain}")

    return WebhookDelivery(
        topic=topic,
        shop_domain=shop_domain,
        api_version=lowered.get(API_VERSION_HEADER.lower()),
        webhook_id=lowered.get(WEBHOOK_ID_HEADER.lower()),
        payload=payload,
    )
