"""
Shopify Admin Module
Typed async client for the Shopify REST Admin API: customers, products,
variants, images, metafields and webhooks.
"""

from .client import ShopifyAdminClient
from .config import ShopifyConfig
from .exceptions import (
    ShopifyAPIError,
    ShopifyAuthError,
    ShopifyNetworkError,
    ShopifyNotFoundError,
    ShopifyRateLimitError,
    ShopifyServerError,
    ShopifyValidationError,
    WebhookVerificationError,
)
from .models import (
    Address,
    Customer,
    Image,
    Metafield,
    Product,
    ProductOption,
    ProductStatus,
    Variant,
    Webhook,
    WebhookDelivery,
    WebhookTopic,
)
from .options import (
    CountOptions,
    CustomerSearchOptions,
    ListOptions,
    MetafieldOptions,
    ProductListOptions,
    WebhookOptions,
    encode_query,
)
from .verification import parse_webhook, verify_webhook_hmac

__version__ = "0.1.0"

__all__ = [
    # Client
    "ShopifyAdminClient",
    "ShopifyConfig",
    # Errors
    "ShopifyAPIError",
    "ShopifyAuthError",
    "ShopifyNetworkError",
    "ShopifyNotFoundError",
    "ShopifyRateLimitError",
    "ShopifyServerError",
    "ShopifyValidationError",
    "WebhookVerificationError",
    # Models
    "Address",
    "Customer",
    "Image",
    "Metafield",
    "Product",
    "ProductOption",
    "ProductStatus",
    "Variant",
    "Webhook",
    "WebhookDelivery",
    "WebhookTopic",
    # Options
    "CountOptions",
    "CustomerSearchOptions",
    "ListOptions",
    "MetafieldOptions",
    "ProductListOptions",
    "WebhookOptions",
    "encode_query",
    # Webhook verification
    "parse_webhook",
    "verify_webhook_hmac",
]
