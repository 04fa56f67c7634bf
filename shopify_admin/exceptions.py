"""
Shopify Admin API Errors
Exception hierarchy raised by the transport and propagated unchanged by the
resource services.
"""

from typing import Any, Dict, List, Optional


class ShopifyAPIError(Exception):
    """Base exception for Shopify API errors"""
    def __init__(self, message: str, status_code: int = None, response_body: dict = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body or {}


class ShopifyNetworkError(ShopifyAPIError):
    """Connection failure or timeout before a response was received"""
    pass


class ShopifyAuthError(ShopifyAPIError):
    """Authentication/authorization error"""
    pass


class ShopifyNotFoundError(ShopifyAPIError):
    """Resource not found"""
    pass


class ShopifyRateLimitError(ShopifyAPIError):
    """Rate limit exceeded"""
    def __init__(self, retry_after: float = 1.0):
        super().__init__(f"Rate limit exceeded. Retry after {retry_after}s", status_code=429)
        self.retry_after = retry_after


class ShopifyServerError(ShopifyAPIError):
    """Any other non-2xx response"""
    pass


class ShopifyValidationError(ShopifyAPIError):
    """
    The API rejected a create/update payload (HTTP 422).

    ``errors`` maps field names to messages, e.g.
    ``{"title": ["can't be blank"]}``. Messages that are not tied to a field
    are collected under ``"base"``.
    """
    def __init__(self, message: str, status_code: int = 422, response_body: dict = None):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.errors = normalize_errors((response_body or {}).get("errors"))


class WebhookVerificationError(Exception):
    """Webhook signature verification failed"""
    pass


def normalize_errors(errors: Any) -> Dict[str, List[str]]:
    """Flatten the shapes Shopify uses for ``errors`` into field -> messages"""
    if not errors:
        return {}
    if isinstance(errors, str):
        return {"base": [errors]}
    if isinstance(errors, list):
        return {"base": [str(e) for e in errors]}
    if isinstance(errors, dict):
        normalized: Dict[str, List[str]] = {}
        for field, messages in errors.items():
            if isinstance(messages, list):
                normalized[field] = [str(m) for m in messages]
            else:
                normalized[field] = [str(messages)]
        return normalized
    return {"base": [str(errors)]}


def format_errors(errors: Optional[Dict[str, List[str]]]) -> str:
    """Render normalized errors as ``field: msg; field: msg``"""
    if not errors:
        return ""
    parts = []
    for field, messages in errors.items():
        for message in messages:
            parts.append(message if field == "base" else f"{field}: {message}")
    return "; ".join(parts)
