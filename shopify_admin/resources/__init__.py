"""REST Admin resource services"""

from .base import ResourceService, RootResourceService, Transport, build_path
from .customers import CustomerService
from .images import ImageService
from .metafields import MetafieldService
from .products import ProductService
from .variants import VariantService
from .webhooks import WebhookService

__all__ = [
    "ResourceService",
    "RootResourceService",
    "Transport",
    "build_path",
    "CustomerService",
    "ImageService",
    "MetafieldService",
    "ProductService",
    "VariantService",
    "WebhookService",
]
