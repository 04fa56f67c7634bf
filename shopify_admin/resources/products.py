"""
Products API
See: https://shopify.dev/docs/api/admin-rest/latest/resources/product
"""

from ..models import Product
from .base import RootResourceService

PRODUCTS_BASE_PATH = "admin/products"


class ProductService(RootResourceService[Product]):
    """Product endpoints"""

    model = Product
    singular = "product"
    plural = "products"
    base_path = PRODUCTS_BASE_PATH
