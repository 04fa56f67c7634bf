"""
Product Variants API
See: https://shopify.dev/docs/api/admin-rest/latest/resources/product-variant

List, count, create and delete are scoped under the product; get and update
address the variant directly.
"""

from typing import Any, AsyncIterator, List, Mapping, Optional, Union

from ..models import Variant
from ..options import QueryOptions
from .base import ResourceService, build_path
from .products import PRODUCTS_BASE_PATH

VARIANTS_BASE_PATH = "admin/variants"


class VariantService(ResourceService[Variant]):
    """Variant endpoints"""

    model = Variant
    singular = "variant"
    plural = "variants"

    def _product_path(self, product_id: int, *parts: Any) -> str:
        return build_path(PRODUCTS_BASE_PATH, product_id, "variants", *parts)

    async def list(self, product_id: int, options: QueryOptions = None) -> List[Variant]:
        """List variants of a product"""
        return await self._list(self._product_path(product_id), options)

    async def count(self, product_id: int, options: QueryOptions = None) -> int:
        """Count variants of a product"""
        return await self._count(self._product_path(product_id, "count"), options)

    async def get(self, variant_id: int, options: QueryOptions = None) -> Variant:
        """Get a single variant"""
        return await self._get(build_path(VARIANTS_BASE_PATH, variant_id), options)

    async def create(self, product_id: int, variant: Union[Variant, Mapping[str, Any]]) -> Variant:
        """Create a variant on a product"""
        return await self._create(self._product_path(product_id), variant)

    async def update(self, variant: Union[Variant, Mapping[str, Any]]) -> Variant:
        """Update a variant identified by ``variant.id``"""
        variant = self._coerce(variant)
        variant_id = self._require_id(variant)
        return await self._update(build_path(VARIANTS_BASE_PATH, variant_id), variant)

    async def delete(self, product_id: int, variant_id: int) -> bool:
        """Delete a variant from a product"""
        return await self._delete(self._product_path(product_id, variant_id))

    def iter_all(
        self,
        product_id: int,
        options: QueryOptions = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[Variant]:
        """Iterate every variant of a product across all pages"""
        return self._iter(self._product_path(product_id), options, max_pages=max_pages)
