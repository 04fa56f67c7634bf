"""
Shopify Client Configuration
Connection settings for a single store, loadable from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_VERSION = "2025-10"


class ShopifyConfig(BaseSettings):
    """
    Settings for ShopifyAdminClient.

    Fields not passed explicitly are read from ``SHOPIFY_SHOP_DOMAIN``,
    ``SHOPIFY_ACCESS_TOKEN``, ``SHOPIFY_API_VERSION``, ``SHOPIFY_TIMEOUT``,
    ``SHOPIFY_MAX_RETRIES`` and ``SHOPIFY_RATE_LIMIT_CALLS``.
    """
    model_config = SettingsConfigDict(env_prefix="SHOPIFY_", extra="ignore")

    shop_domain: str = Field(min_length=1)
    access_token: str = Field(min_length=1)
    api_version: str = DEFAULT_API_VERSION
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=1)
    rate_limit_calls: int = Field(default=2, ge=1)

    @classmethod
    def from_env(cls, prefix: str = "SHOPIFY_") -> "ShopifyConfig":
        """
        Build config from environment variables only.

        Raises:
            ValueError: If the domain or token is missing (pydantic's
                ValidationError is a ValueError)
        """
        return cls(_env_prefix=prefix)
