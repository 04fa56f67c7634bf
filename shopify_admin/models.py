"""
Shopify Admin API Models
Pydantic records for the REST Admin API resources.

Records are immutable value objects. Every field is optional so that a partial
record can be sent on create/update; ``id`` is always assigned by Shopify.
Use ``record.model_copy(update={...})`` to derive a modified record.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


# =============================================================================
# Enums
# =============================================================================

class ProductStatus(str, Enum):
    """Shopify product status"""
    ACTIVE = "active"
    ARCHIVED = "archived"
    DRAFT = "draft"


class WebhookTopic(str, Enum):
    """Common Shopify webhook topics"""
    ORDERS_CREATE = "orders/create"
    ORDERS_UPDATED = "orders/updated"
    ORDERS_PAID = "orders/paid"
    ORDERS_CANCELLED = "orders/cancelled"
    PRODUCTS_CREATE = "products/create"
    PRODUCTS_UPDATE = "products/update"
    PRODUCTS_DELETE = "products/delete"
    CUSTOMERS_CREATE = "customers/create"
    CUSTOMERS_UPDATE = "customers/update"
    CUSTOMERS_DELETE = "customers/delete"
    APP_UNINSTALLED = "app/uninstalled"


class ShopifyRecord(BaseModel):
    """Base for all resource records"""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict with only the fields that were set"""
        return self.model_dump(mode="json", exclude_unset=True)


# =============================================================================
# Customer Models
# =============================================================================

class Address(ShopifyRecord):
    """Customer address"""
    customer_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    province_code: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    name: Optional[str] = None
    default: Optional[bool] = None


class Customer(ShopifyRecord):
    """Shopify customer"""
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    state: Optional[str] = None
    note: Optional[str] = None
    verified_email: Optional[bool] = None
    multipass_identifier: Optional[str] = None
    orders_count: Optional[int] = None
    tax_exempt: Optional[bool] = None
    total_spent: Optional[Decimal] = None
    phone: Optional[str] = None
    tags: Optional[str] = None
    last_order_id: Optional[int] = None
    last_order_name: Optional[str] = None
    accepts_marketing: Optional[bool] = None
    currency: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    addresses: Optional[List[Address]] = None
    default_address: Optional[Address] = None

    @property
    def full_name(self) -> str:
        """Get customer full name"""
        parts = [self.first_name, self.last_name]
        return " ".join(p for p in parts if p)


# =============================================================================
# Product Models
# =============================================================================

class Variant(ShopifyRecord):
    """Shopify product variant"""
    product_id: Optional[int] = None
    title: Optional[str] = None
    sku: Optional[str] = None
    position: Optional[int] = None
    grams: Optional[int] = None
    inventory_policy: Optional[str] = None
    price: Optional[Decimal] = None
    compare_at_price: Optional[Decimal] = None
    fulfillment_service: Optional[str] = None
    inventory_management: Optional[str] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    taxable: Optional[bool] = None
    barcode: Optional[str] = None
    image_id: Optional[int] = None
    inventory_item_id: Optional[int] = None
    inventory_quantity: Optional[int] = None
    weight: Optional[Decimal] = None
    weight_unit: Optional[str] = None
    old_inventory_quantity: Optional[int] = None
    requires_shipping: Optional[bool] = None


class Image(ShopifyRecord):
    """
    Shopify product image.

    An image is created either from ``src`` (a public URL) or from
    ``attachment`` (base64 content) with an optional ``filename``. When both
    ``attachment`` and ``src`` are given, Shopify uses the attachment.
    """
    product_id: Optional[int] = None
    position: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    width: Optional[int] = None
    height: Optional[int] = None
    alt: Optional[str] = None
    src: Optional[str] = None
    attachment: Optional[str] = None
    filename: Optional[str] = None
    variant_ids: Optional[List[int]] = None


class ProductOption(ShopifyRecord):
    """Shopify product option (e.g., Size, Color)"""
    product_id: Optional[int] = None
    name: Optional[str] = None
    position: Optional[int] = None
    values: Optional[List[str]] = None


class Product(ShopifyRecord):
    """Shopify product"""
    title: Optional[str] = None
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    handle: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    published_scope: Optional[str] = None
    tags: Optional[str] = None
    template_suffix: Optional[str] = None
    options: Optional[List[ProductOption]] = None
    variants: Optional[List[Variant]] = None
    image: Optional[Image] = None
    images: Optional[List[Image]] = None

    @property
    def tags_list(self) -> List[str]:
        """Convert comma-separated tags to list"""
        return [t.strip() for t in (self.tags or "").split(",") if t.strip()]


# =============================================================================
# Metafield Models
# =============================================================================

class Metafield(ShopifyRecord):
    """
    Shopify metafield.

    ``value_type`` is the legacy type field (string, integer, json_string);
    ``type`` is the typed-metafield field used by newer API versions.
    """
    namespace: Optional[str] = None
    key: Optional[str] = None
    value: Any = None
    value_type: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    owner_id: Optional[int] = None
    owner_resource: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Webhook Models
# =============================================================================

class Webhook(ShopifyRecord):
    """Shopify webhook subscription"""
    address: Optional[str] = None
    topic: Optional[str] = None
    format: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    fields: Optional[List[str]] = None
    metafield_namespaces: Optional[List[str]] = None
    api_version: Optional[str] = None


class WebhookDelivery(BaseModel):
    """Incoming, verified webhook delivery"""
    topic: str
    shop_domain: str
    api_version: Optional[str] = None
    webhook_id: Optional[str] = None
    payload: Dict[str, Any]
