"""
Shopify Admin API Client
Shared transport for the REST Admin resource services: URL composition,
authentication, rate limiting, retry logic and Link-header pagination.

Rate Limit: 2 calls/second (REST API, standard plans)
"""

import asyncio
import logging
import time
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import httpx

from .config import DEFAULT_API_VERSION, ShopifyConfig
from .exceptions import (
    ShopifyAPIError,
    ShopifyAuthError,
    ShopifyNetworkError,
    ShopifyNotFoundError,
    ShopifyRateLimitError,
    ShopifyServerError,
    ShopifyValidationError,
    format_errors,
    normalize_errors,
)
from .resources import (
    CustomerService,
    ImageService,
    MetafieldService,
    ProductService,
    VariantService,
    WebhookService,
)

logger = logging.getLogger(__name__)


class ShopifyAdminClient:
    """
    Shopify Admin API Client with rate limiting and retry logic.

    Resource services hang off the client and share its connection, rate
    limiter and retry policy.

    Usage:
        async with ShopifyAdminClient(
            shop_domain="my-store.myshopify.com",
            access_token="shpat_xxxxx"
        ) as client:
            products = await client.products.list(ProductListOptions(limit=50))
            count = await client.customers.count()
    """

    API_VERSION = DEFAULT_API_VERSION

    # Rate limiting: 2 calls per second for REST API
    RATE_LIMIT_CALLS = 2
    RATE_LIMIT_PERIOD = 1.0  # seconds

    # Retry configuration
    MAX_RETRIES = 3
    RETRY_BACKOFF_BASE = 1.0
    RETRY_BACKOFF_MAX = 30.0
    DEFAULT_RETRY_AFTER = 2.0

    # POST is never retried after a server or network failure
    IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = None,
        timeout: float = None,
        max_retries: int = None,
        rate_limit_calls: int = None,
        retry_backoff_base: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ):
        """
        Initialize Shopify Admin API client.

        Args:
            shop_domain: Store domain (e.g., "my-store.myshopify.com")
            access_token: Shopify Admin API access token
            api_version: API version (default: 2025-10). An empty string
                sends unversioned ``admin/...`` paths.
            timeout: Request timeout in seconds
            max_retries: Attempts per request, including the first
            rate_limit_calls: Calls allowed per RATE_LIMIT_PERIOD
            retry_backoff_base: Base delay for exponential backoff
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.shop_domain = self._normalize_domain(shop_domain)

        if not access_token or not access_token.strip():
            raise ValueError("Access token cannot be empty")
        self.access_token = access_token.strip()

        self.api_version = self.API_VERSION if api_version is None else api_version
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.max_retries = self.MAX_RETRIES if max_retries is None else max_retries
        self.rate_limit_calls = (
            self.RATE_LIMIT_CALLS if rate_limit_calls is None else rate_limit_calls
        )
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.rate_limit_calls < 1:
            raise ValueError("rate_limit_calls must be at least 1")
        self.retry_backoff_base = (
            self.RETRY_BACKOFF_BASE if retry_backoff_base is None else retry_backoff_base
        )

        self.base_url = f"https://{self.shop_domain}/"

        # Rate limiting state
        self._call_timestamps: List[float] = []
        self._rate_limit_lock = asyncio.Lock()

        # HTTP client (lazy initialization)
        self._client: Optional[httpx.AsyncClient] = None
        self._transport = transport

        # Resource services
        self.customers = CustomerService(self)
        self.products = ProductService(self)
        self.variants = VariantService(self)
        self.images = ImageService(self)
        self.metafields = MetafieldService(self)
        self.webhooks = WebhookService(self)

        logger.info(
            f"Initialized ShopifyAdminClient for {self.shop_domain} "
            f"(API {self.api_version or 'unversioned'})"
        )

    @classmethod
    def from_config(cls, config: ShopifyConfig, **kwargs) -> "ShopifyAdminClient":
        """Create a client from a ShopifyConfig"""
        return cls(
            shop_domain=config.shop_domain,
            access_token=config.access_token,
            api_version=config.api_version,
            timeout=config.timeout,
            max_retries=config.max_retries,
            rate_limit_calls=config.rate_limit_calls,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "ShopifyAdminClient":
        """Create a client from SHOPIFY_* environment variables"""
        return cls.from_config(ShopifyConfig.from_env(), **kwargs)

    @staticmethod
    def _normalize_domain(domain: str) -> str:
        """Normalize shop domain to just the hostname"""
        domain = (domain or "").strip()

        # Remove protocol if present
        if domain.startswith(("http://", "https://")):
            parsed = urlparse(domain)
            domain = parsed.netloc or parsed.path

        # Remove trailing slashes and paths
        domain = domain.split("/")[0]

        if not domain:
            raise ValueError("Shop domain cannot be empty")

        # Bare shop name: append .myshopify.com
        if "." not in domain:
            domain = f"{domain}.myshopify.com"

        return domain

    def _build_url(self, path: str) -> str:
        """Compose the absolute URL, inserting the API version after admin/"""
        path = path.lstrip("/")
        if self.api_version and path.startswith("admin/") and not path.startswith("admin/api/"):
            path = f"admin/api/{self.api_version}/{path[len('admin/'):]}"
        return self.base_url + path

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "X-Shopify-Access-Token": self.access_token,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client"""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =========================================================================
    # Rate Limiting
    # =========================================================================

    async def _wait_for_rate_limit(self):
        """Wait if necessary to respect rate limits"""
        async with self._rate_limit_lock:
            now = time.monotonic()

            # Remove old timestamps outside the rate limit window
            self._call_timestamps = [
                ts for ts in self._call_timestamps
                if now - ts < self.RATE_LIMIT_PERIOD
            ]

            # If at limit, wait for oldest call to expire
            if len(self._call_timestamps) >= self.rate_limit_calls:
                oldest = min(self._call_timestamps)
                wait_time = self.RATE_LIMIT_PERIOD - (now - oldest)
                if wait_time > 0:
                    logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                    await asyncio.sleep(wait_time)

            # Record this call
            self._call_timestamps.append(time.monotonic())

    def _parse_rate_limit_headers(self, response: httpx.Response) -> Tuple[int, int]:
        """Parse rate limit info from response headers"""
        # Shopify returns: X-Shopify-Shop-Api-Call-Limit: "32/40"
        limit_header = response.headers.get("X-Shopify-Shop-Api-Call-Limit", "")
        if "/" in limit_header:
            used, max_limit = limit_header.split("/", 1)
            try:
                return int(used), int(max_limit)
            except ValueError:
                pass
        return 0, 40

    def _retry_after(self, response: httpx.Response) -> float:
        try:
            return max(float(response.headers.get("Retry-After", self.DEFAULT_RETRY_AFTER)), 0.0)
        except ValueError:
            return self.DEFAULT_RETRY_AFTER

    def _backoff(self, attempt: int) -> float:
        return min(self.retry_backoff_base * (2 ** attempt), self.RETRY_BACKOFF_MAX)

    # =========================================================================
    # Response handling
    # =========================================================================

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {"errors": response.text}
        return body if isinstance(body, dict) else {"errors": body}

    def _error_for(self, response: httpx.Response, path: str) -> ShopifyAPIError:
        """Map a non-2xx response to the matching exception"""
        status = response.status_code
        body = self._error_body(response)
        errors = body.get("errors", "")

        if status == 401:
            return ShopifyAuthError(
                "Invalid or expired access token",
                status_code=status,
                response_body=body,
            )
        if status == 403:
            return ShopifyAuthError(
                f"Access forbidden: {errors or 'Insufficient permissions'}",
                status_code=status,
                response_body=body,
            )
        if status == 404:
            return ShopifyNotFoundError(
                f"Resource not found: {path}",
                status_code=status,
                response_body=body,
            )
        if status == 422:
            details = format_errors(normalize_errors(errors))
            return ShopifyValidationError(
                f"Validation failed: {details or 'unprocessable entity'}",
                status_code=status,
                response_body=body,
            )

        error_message = f"API error {status}: {errors or response.reason_phrase}"
        if "Unavailable Shop" in str(errors):
            error_message = (
                f"Unavailable Shop: The shop '{self.shop_domain}' cannot be accessed. "
                "Verify the shop domain, that the access token belongs to this shop "
                "and that the shop is active."
            )
        return ShopifyServerError(error_message, status_code=status, response_body=body)

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        """Decode a successful response body; empty bodies become {}"""
        if response.status_code == 204 or not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyAPIError(
                f"Invalid JSON in response: {e}",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise ShopifyAPIError(
                "Expected a JSON object in response",
                status_code=response.status_code,
            )
        return data

    # =========================================================================
    # HTTP Methods with Retry
    # =========================================================================

    async def _send(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] = None,
        json_data: Dict[str, Any] = None,
    ) -> httpx.Response:
        """
        Make HTTP request with rate limiting and retry logic.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Resource path (e.g., "admin/products.json")
            params: Query parameters
            json_data: JSON body data

        Returns:
            The successful httpx.Response

        Raises:
            ShopifyNetworkError: On timeouts/connection errors (after retries)
            ShopifyRateLimitError: On rate limit (after retries)
            ShopifyAuthError: On authentication errors
            ShopifyNotFoundError: On 404
            ShopifyValidationError: On 422
            ShopifyServerError: On any other non-2xx status
        """
        url = self._build_url(path)
        client = await self._get_client()
        retryable = method in self.IDEMPOTENT_METHODS

        last_error: Optional[ShopifyAPIError] = None

        for attempt in range(self.max_retries):
            has_next_attempt = attempt + 1 < self.max_retries

            # Wait for rate limit
            await self._wait_for_rate_limit()

            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params or None,
                    json=json_data,
                )
            except httpx.TimeoutException as e:
                last_error = ShopifyNetworkError(f"Request timeout: {e}")
            except httpx.RequestError as e:
                last_error = ShopifyNetworkError(f"Request error: {e}")
            else:
                used, max_limit = self._parse_rate_limit_headers(response)
                logger.debug(
                    f"API call: {method} {path} -> {response.status_code} "
                    f"- Rate: {used}/{max_limit}"
                )

                if response.is_success:
                    return response

                if response.status_code == 429:
                    # Rate limited: the request was not processed, so any method may retry
                    retry_after = self._retry_after(response)
                    last_error = ShopifyRateLimitError(retry_after)
                    if has_next_attempt:
                        logger.warning(f"Rate limited. Retry after {retry_after}s (attempt {attempt + 1})")
                        await asyncio.sleep(retry_after)
                    continue

                error = self._error_for(response, path)
                if response.status_code < 500 or not retryable:
                    raise error
                last_error = error

            if not retryable:
                raise last_error

            if has_next_attempt:
                backoff = self._backoff(attempt)
                logger.warning(f"{last_error}. Retrying {method} {path} in {backoff}s (attempt {attempt + 1})")
                await asyncio.sleep(backoff)

        # All retries exhausted
        raise last_error or ShopifyAPIError("Request failed after all retries")

    async def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] = None,
        json_data: Dict[str, Any] = None,
    ) -> Dict[str, Any]:
        response = await self._send(method, path, params=params, json_data=json_data)
        return self._decode(response)

    async def get(self, path: str, params: Dict[str, Any] = None) -> Dict[str, Any]:
        """GET request"""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST request"""
        return await self._request("POST", path, json_data=body)

    async def put(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """PUT request"""
        return await self._request("PUT", path, json_data=body)

    async def delete(self, path: str) -> Dict[str, Any]:
        """DELETE request"""
        return await self._request("DELETE", path)

    async def count(self, path: str, params: Dict[str, Any] = None) -> int:
        """GET a ``{"count": N}`` endpoint and return N"""
        response = await self.get(path, params=params)
        count = response.get("count")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ShopifyAPIError(
                f"Invalid count in response from {path}: {count!r}",
                response_body=response,
            )
        return count

    # =========================================================================
    # Pagination Helper
    # =========================================================================

    @staticmethod
    def _parse_link_header(link_header: str) -> Optional[str]:
        """Parse Link header for next page cursor"""
        if not link_header:
            return None

        # Format: <url>; rel="next", <url>; rel="previous"
        for part in link_header.split(","):
            if 'rel="next"' in part:
                # Extract URL and get page_info parameter
                url_part = part.split(";")[0].strip().strip("<>")
                params = parse_qs(urlparse(url_part).query)
                if "page_info" in params:
                    return params["page_info"][0]
        return None

    async def paginate(
        self,
        path: str,
        key: str,
        params: Dict[str, Any] = None,
        max_pages: int = None,
    ) -> AsyncIterator[List[Dict[str, Any]]]:
        """
        Yield each page of a paginated list endpoint.

        Args:
            path: Resource path
            key: Envelope key holding the items (e.g., "products")
            params: Query parameters for the first page
            max_pages: Maximum pages to fetch (None = all)
        """
        if max_pages is not None and max_pages < 1:
            return

        params = dict(params or {})
        limit = params.get("limit")
        page_count = 0

        while True:
            response = await self._send("GET", path, params=params)
            items = self._decode(response).get(key) or []

            page_count += 1
            logger.debug(f"Fetched page {page_count} of {path}: {len(items)} items")
            yield items

            next_cursor = self._parse_link_header(response.headers.get("Link", ""))
            if not next_cursor:
                break

            if max_pages is not None and page_count >= max_pages:
                logger.info(f"Reached max pages limit ({max_pages})")
                break

            # Cursor pages accept only page_info and limit
            params = {"page_info": next_cursor}
            if limit:
                params["limit"] = limit
