"""
Customers API
See: https://shopify.dev/docs/api/admin-rest/latest/resources/customer
"""

from typing import List

from ..models import Customer
from ..options import QueryOptions, encode_query
from .base import RootResourceService, build_path

CUSTOMERS_BASE_PATH = "admin/customers"


class CustomerService(RootResourceService[Customer]):
    """Customer endpoints"""

    model = Customer
    singular = "customer"
    plural = "customers"
    base_path = CUSTOMERS_BASE_PATH

    async def search(self, query: str, options: QueryOptions = None) -> List[Customer]:
        """
        Search customers by query.

        Args:
            query: Search query (e.g. "email:bob@example.com", "country:Canada")
            options: Extra parameters such as limit, order or fields

        Returns:
            List of matching customers
        """
        params = encode_query(options)
        params["query"] = query
        response = await self.client.get(
            build_path(CUSTOMERS_BASE_PATH, "search"), params=params
        )
        return self._unwrap_many(response)
