"""
Shopify Query Options
Filter/option models for list, count and search requests, and the encoder that
turns them into URL query parameters.

Every option model accepts extra keys, so filters the models do not name can
still be passed through. A plain ``dict`` is accepted anywhere a model is.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


class ListOptions(BaseModel):
    """Options shared by list and count endpoints"""
    model_config = ConfigDict(extra="allow")

    limit: Optional[int] = None
    since_id: Optional[int] = None
    page_info: Optional[str] = None
    created_at_min: Optional[datetime] = None
    created_at_max: Optional[datetime] = None
    updated_at_min: Optional[datetime] = None
    updated_at_max: Optional[datetime] = None
    fields: Optional[List[str]] = None
    ids: Optional[List[int]] = None


class CountOptions(BaseModel):
    """Options accepted by count endpoints"""
    model_config = ConfigDict(extra="allow")

    created_at_min: Optional[datetime] = None
    created_at_max: Optional[datetime] = None
    updated_at_min: Optional[datetime] = None
    updated_at_max: Optional[datetime] = None


class ProductListOptions(ListOptions):
    """Product-specific list filters"""
    title: Optional[str] = None
    vendor: Optional[str] = None
    handle: Optional[str] = None
    product_type: Optional[str] = None
    status: Optional[str] = None
    collection_id: Optional[int] = None
    published_status: Optional[str] = None


class CustomerSearchOptions(BaseModel):
    """Options for the customer search endpoint"""
    model_config = ConfigDict(extra="allow")

    query: Optional[str] = None
    order: Optional[str] = None
    limit: Optional[int] = None
    fields: Optional[List[str]] = None


class MetafieldOptions(ListOptions):
    """Metafield list filters"""
    namespace: Optional[str] = None
    key: Optional[str] = None
    value_type: Optional[str] = None
    type: Optional[str] = None


class WebhookOptions(ListOptions):
    """Webhook list filters"""
    address: Optional[str] = None
    topic: Optional[str] = None


QueryOptions = Union[BaseModel, Mapping[str, Any], None]


def _encode_value(value: Any) -> Optional[str]:
    """Encode a single option value, or None when it should be omitted"""
    # bool before int: bool is an int subclass
    if value is None or value is False:
        return None
    if value is True:
        return "true"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (int, float, Decimal)):
        return None if value == 0 else str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [_encode_value(v) for v in value]
        items = [i for i in items if i is not None]
        return ",".join(items) if items else None
    value = str(value)
    return value or None


def encode_query(options: QueryOptions) -> Dict[str, str]:
    """
    Serialize an options bag into query parameters.

    Keys whose value is None, empty, zero or False are omitted. Datetimes are
    ISO-8601 encoded and sequences (ids, fields) are comma-joined.
    """
    if options is None:
        return {}
    if isinstance(options, BaseModel):
        raw = options.model_dump(exclude_none=True)
    elif isinstance(options, Mapping):
        raw = dict(options)
    else:
        raise TypeError(f"Unsupported options type: {type(options).__name__}")

    params = {}
    for key, value in raw.items():
        encoded = _encode_value(value)
        if encoded is not None:
            params[key] = encoded
    return params
