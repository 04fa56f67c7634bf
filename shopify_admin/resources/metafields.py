"""
Metafields API
See: https://shopify.dev/docs/api/admin-rest/latest/resources/metafield
"""

from typing import List

from ..models import Metafield
from ..options import QueryOptions
from .base import RootResourceService, build_path

METAFIELDS_BASE_PATH = "admin/metafields"


def owner_path(resource_path: str) -> str:
    """
    Normalize the path of the object that owns metafields.

    "/orders/123/" and "orders/123" both become "admin/orders/123".
    """
    resource_path = resource_path.strip().strip("/")
    if not resource_path:
        raise ValueError("resource_path cannot be empty")
    return f"admin/{resource_path}"


class MetafieldService(RootResourceService[Metafield]):
    """
    Metafield endpoints.

    The root endpoints (``admin/metafields``) address shop-level metafields.
    Metafields attached to another object (order, product, customer...) are
    listed with ``list_for_object``.
    """

    model = Metafield
    singular = "metafield"
    plural = "metafields"
    base_path = METAFIELDS_BASE_PATH

    async def list_for_object(
        self,
        resource_path: str,
        options: QueryOptions = None,
    ) -> List[Metafield]:
        """
        List metafields owned by an arbitrary resource.

        Args:
            resource_path: Owner path such as "orders/123" or "/products/42/"
            options: Filters (namespace, key, limit, ...)
        """
        path = build_path(owner_path(resource_path), "metafields")
        return await self._list(path, options)

    async def count_for_object(
        self,
        resource_path: str,
        options: QueryOptions = None,
    ) -> int:
        """Count metafields owned by an arbitrary resource"""
        path = build_path(owner_path(resource_path), "metafields", "count")
        return await self._count(path, options)
