"""
Generic Resource Service
One implementation of the List/Count/Get/Create/Update/Delete shape shared by
every REST Admin resource. Concrete services only declare their names, record
model and paths.
"""

import logging
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Protocol,
    Type,
    TypeVar,
    Union,
)

from ..exceptions import ShopifyAPIError
from ..models import ShopifyRecord
from ..options import QueryOptions, encode_query

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=ShopifyRecord)


class Transport(Protocol):
    """What a resource service needs from the HTTP client"""

    async def get(self, path: str, params: Dict[str, Any] = None) -> Dict[str, Any]: ...

    async def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]: ...

    async def put(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]: ...

    async def delete(self, path: str) -> Dict[str, Any]: ...

    async def count(self, path: str, params: Dict[str, Any] = None) -> int: ...

    def paginate(
        self,
        path: str,
        key: str,
        params: Dict[str, Any] = None,
        max_pages: int = None,
    ) -> AsyncIterator[List[Dict[str, Any]]]: ...


def build_path(*parts: Any) -> str:
    """Join path segments and append the ``.json`` suffix"""
    return "/".join(str(p).strip("/") for p in parts) + ".json"


class ResourceService(Generic[R]):
    """
    Envelope handling and request helpers for one resource type.

    Subclasses set:
        model: record class
        singular: envelope key for one record (e.g. "product")
        plural: envelope key for a list (e.g. "products")
    """

    model: Type[R]
    singular: str
    plural: str

    def __init__(self, client: Transport):
        self.client = client

    # =========================================================================
    # Envelopes
    # =========================================================================

    def _coerce(self, record: Union[R, Mapping[str, Any]]) -> R:
        if isinstance(record, Mapping):
            return self.model.model_validate(dict(record))
        return record

    def _wrap(self, record: R) -> Dict[str, Any]:
        return {self.singular: record.to_payload()}

    def _unwrap_one(self, response: Dict[str, Any], path: str) -> R:
        data = response.get(self.singular)
        if data is None:
            raise ShopifyAPIError(
                f"Response from {path} has no '{self.singular}' object",
                response_body=response,
            )
        return self.model.model_validate(data)

    def _unwrap_many(self, response: Dict[str, Any]) -> List[R]:
        return [self.model.model_validate(item) for item in response.get(self.plural) or []]

    def _require_id(self, record: R) -> int:
        if not record.id:
            raise ValueError(f"Cannot update {self.singular} without an id")
        return record.id

    # =========================================================================
    # Request helpers
    # =========================================================================

    async def _list(self, path: str, options: QueryOptions = None) -> List[R]:
        response = await self.client.get(path, params=encode_query(options))
        return self._unwrap_many(response)

    async def _count(self, path: str, options: QueryOptions = None) -> int:
        return await self.client.count(path, params=encode_query(options))

    async def _get(self, path: str, options: QueryOptions = None) -> R:
        response = await self.client.get(path, params=encode_query(options))
        return self._unwrap_one(response, path)

    async def _create(self, path: str, record: Union[R, Mapping[str, Any]]) -> R:
        response = await self.client.post(path, self._wrap(self._coerce(record)))
        return self._unwrap_one(response, path)

    async def _update(self, path: str, record: R) -> R:
        response = await self.client.put(path, self._wrap(record))
        return self._unwrap_one(response, path)

    async def _delete(self, path: str) -> bool:
        await self.client.delete(path)
        return True

    async def _iter(
        self,
        path: str,
        options: QueryOptions = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[R]:
        pages = self.client.paginate(
            path, self.plural, params=encode_query(options), max_pages=max_pages
        )
        async for page in pages:
            for item in page:
                yield self.model.model_validate(item)


class RootResourceService(ResourceService[R]):
    """
    Resource addressed directly under ``admin/`` (customers, products, ...).

        GET    admin/{plural}.json
        GET    admin/{plural}/count.json
        GET    admin/{plural}/{id}.json
        POST   admin/{plural}.json
        PUT    admin/{plural}/{id}.json
        DELETE admin/{plural}/{id}.json
    """

    base_path: str

    async def list(self, options: QueryOptions = None) -> List[R]:
        """List records; an empty collection returns ``[]``"""
        return await self._list(build_path(self.base_path), options)

    async def count(self, options: QueryOptions = None) -> int:
        """Count records matching the options"""
        return await self._count(build_path(self.base_path, "count"), options)

    async def get(self, resource_id: int, options: QueryOptions = None) -> R:
        """Get a single record; raises ShopifyNotFoundError on 404"""
        return await self._get(build_path(self.base_path, resource_id), options)

    async def create(self, record: Union[R, Mapping[str, Any]]) -> R:
        """Create a record; Shopify assigns the id and timestamps"""
        return await self._create(build_path(self.base_path), record)

    async def update(self, record: Union[R, Mapping[str, Any]]) -> R:
        """
        Update a record identified by ``record.id``.

        Raises:
            ValueError: If the record has no id. Nothing is sent.
        """
        record = self._coerce(record)
        resource_id = self._require_id(record)
        return await self._update(build_path(self.base_path, resource_id), record)

    async def delete(self, resource_id: int) -> bool:
        """Delete a record"""
        return await self._delete(build_path(self.base_path, resource_id))

    def iter_all(
        self,
        options: QueryOptions = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[R]:
        """Iterate every record across all pages"""
        logger.debug(f"Iterating all {self.plural}")
        return self._iter(build_path(self.base_path), options, max_pages=max_pages)
