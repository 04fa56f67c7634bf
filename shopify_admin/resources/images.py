"""
Product Images API
See: https://shopify.dev/docs/api/admin-rest/latest/resources/product-image
"""

from typing import Any, AsyncIterator, List, Mapping, Optional, Union

from ..models import Image
from ..options import QueryOptions
from .base import ResourceService, build_path
from .products import PRODUCTS_BASE_PATH


class ImageService(ResourceService[Image]):
    """
    Image endpoints, all scoped under a product:
    ``admin/products/{product_id}/images/...``
    """

    model = Image
    singular = "image"
    plural = "images"

    def _path(self, product_id: int, *parts: Any) -> str:
        return build_path(PRODUCTS_BASE_PATH, product_id, "images", *parts)

    async def list(self, product_id: int, options: QueryOptions = None) -> List[Image]:
        """List images of a product"""
        return await self._list(self._path(product_id), options)

    async def count(self, product_id: int, options: QueryOptions = None) -> int:
        """Count images of a product"""
        return await self._count(self._path(product_id, "count"), options)

    async def get(self, product_id: int, image_id: int, options: QueryOptions = None) -> Image:
        """Get a single image"""
        return await self._get(self._path(product_id, image_id), options)

    async def create(self, product_id: int, image: Union[Image, Mapping[str, Any]]) -> Image:
        """
        Create an image from ``src`` or from ``attachment`` (+ ``filename``).
        """
        return await self._create(self._path(product_id), image)

    async def update(self, product_id: int, image: Union[Image, Mapping[str, Any]]) -> Image:
        """Update an image identified by ``image.id``"""
        image = self._coerce(image)
        image_id = self._require_id(image)
        return await self._update(self._path(product_id, image_id), image)

    async def delete(self, product_id: int, image_id: int) -> bool:
        """Delete an image"""
        return await self._delete(self._path(product_id, image_id))

    def iter_all(
        self,
        product_id: int,
        options: QueryOptions = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[Image]:
        """Iterate every image of a product across all pages"""
        return self._iter(self._path(product_id), options, max_pages=max_pages)
