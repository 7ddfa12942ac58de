"""
Table Accessor

Async key/value facade over one DynamoDB table. It builds keys from plain
dicts, runs the blocking boto3 call in a worker thread, and reports every
outcome as a ``Result``:

    accessor = TableAccessor(TableDefinition(table_name="orders",
                                             hash_key="customer_id",
                                             range_key="order_id"))
    error, order = await accessor.get({"customer_id": "c-1", "order_id": "o-9"})
    if error:
        ...

Not-found is a success: ``get`` and ``delete`` return a ``None`` value,
``batch_get`` an empty list. After each successful operation the registered
observers are notified; they cannot change the result.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from botocore.exceptions import ParamValidationError

from ..config import DynamoDBConfig, TableDefinition
from ..exceptions import ConnectionError, DynamoDBAccessorError, ValidationError
from .observers import Observer, notify_observers
from .operations import Operation
from .result import Result
from .table_gateway import TableGateway, create_table_gateway

logger = logging.getLogger(__name__)

Item = Dict[str, Any]


class TableAccessor:
    """Get, batch get, put, delete and paginated query for one table.

    Instances carry no per-call state, so one accessor can serve any number
    of concurrent calls.
    """

    def __init__(
        self,
        definition: TableDefinition,
        config: Optional[DynamoDBConfig] = None,
        observers: Optional[Sequence[Observer]] = None,
        gateway: Optional[TableGateway] = None,
    ):
        """Initialize the accessor.

        Args:
            definition: Table name and key schema
            config: Connection settings (read from the environment if omitted)
            observers: Observers notified after successful operations
            gateway: Pre-built gateway; created from ``config`` if omitted
        """
        if config is None:
            config = DynamoDBConfig.from_env()
        if definition.region and definition.region != config.region_name:
            config = config.for_region(definition.region)

        self.definition = definition
        self.config = config
        self.gateway = gateway or create_table_gateway(config, definition.table_name, definition.hash_key)
        self._observers: List[Observer] = list(observers or [])

    def __repr__(self) -> str:
        return (
            f"TableAccessor(table={self.table_name!r}, hash_key={self.hash_key!r}, "
            f"range_key={self.range_key!r})"
        )

    @property
    def name(self) -> str:
        return self.definition.display_name

    @property
    def table_name(self) -> str:
        """Full table name, including any configured prefix."""
        return self.gateway.table_name

    @property
    def hash_key(self) -> str:
        return self.definition.hash_key

    @property
    def range_key(self) -> Optional[str]:
        return self.definition.range_key

    @property
    def region(self) -> str:
        return self.config.region_name

    @property
    def observers(self) -> List[Observer]:
        return list(self._observers)

    def add_observer(self, observer: Observer) -> None:
        """Register an observer for all subsequent operations."""
        self._observers.append(observer)

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def derive_key(self, query: Dict[str, Any]) -> Item:
        """Build the primary key for ``query``.

        The range key is included only when the table has one and the
        query holds a truthy value for it; otherwise it is silently left out.
        """
        key = {self.hash_key: query.get(self.hash_key)}

        range_value = query.get(self.range_key) if self.range_key else None
        if range_value:
            key[self.range_key] = range_value

        return key

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def _execute(self, operation: Operation, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one gateway primitive in a worker thread.

        Raises:
            DynamoDBAccessorError: Any failure, mapped or wrapped
        """
        try:
            return await asyncio.to_thread(self.gateway.request, operation, params)
        except DynamoDBAccessorError:
            raise
        except (TypeError, ParamValidationError) as e:
            # Rejected before sending (e.g. float attributes, malformed params)
            raise ValidationError(
                f"{operation.value} on {self.table_name} rejected: {e}",
                original_error=e,
            ) from e
        except Exception as e:
            raise ConnectionError(
                f"{operation.value} on {self.table_name} failed: {e}",
                original_error=e,
                context={'table_name': self.table_name},
            ) from e

    async def try_request(self, operation: Operation, params: Dict[str, Any]) -> Result:
        """Run one gateway primitive and capture its outcome.

        Returns:
            ``Result.success(raw_response)`` or ``Result.failure(error)``;
            never raises.
        """
        try:
            response = await self._execute(operation, params)
        except DynamoDBAccessorError as e:
            return Result.failure(e)
        return Result.success(response)

    async def notify_observers(self, operation: Operation, data: Any, params: Optional[Dict[str, Any]]) -> None:
        """Notify every registered observer; failures are only logged."""
        await notify_observers(self._observers, operation, data, params)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    async def iter_pages(self, query_params: Dict[str, Any]) -> AsyncIterator[List[Item]]:
        """Yield the items of a Query one page at a time.

        Follows ``LastEvaluatedKey`` until the store stops returning one.
        The caller's ``query_params`` are not modified.

        Raises:
            DynamoDBAccessorError: If any page request fails
        """
        params = dict(query_params)

        while True:
            response = await self._execute(Operation.QUERY, dict(params))
            yield response.get('Items', [])

            last_key = response.get('LastEvaluatedKey')
            if last_key is None:
                break
            params['ExclusiveStartKey'] = last_key

    async def fetch_all_pages(self, query_params: Dict[str, Any]) -> List[Item]:
        """Run a Query to exhaustion and return every item in store order.

        There is no page limit; use ``iter_pages`` to stop early.

        Raises:
            DynamoDBAccessorError: If any page request fails
        """
        items: List[Item] = []
        async for page in self.iter_pages(query_params):
            items.extend(page)
        return items

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get(self, query: Dict[str, Any]) -> Result:
        """Fetch one item by key.

        Returns:
            Result whose value is the item, or None if no item has that key
        """
        params = {'Key': self.derive_key(query)}

        result = await self.try_request(Operation.GET, params)
        if result.is_failure:
            logger.error(f"Failed to get item from {self.name}: {result.error}")
            return result

        item = (result.value or {}).get('Item')
        await self.notify_observers(Operation.GET, item, params)
        return Result.success(item)

    async def batch_get(self, queries: Sequence[Dict[str, Any]]) -> Result:
        """Fetch several items in one BatchGetItem request.

        Returns:
            Result whose value is the list of found items, in the order the
            store returned them; missing keys are simply absent
        """
        params = {
            'RequestItems': {
                self.table_name: {
                    'Keys': [self.derive_key(query) for query in queries],
                },
            },
        }

        result = await self.try_request(Operation.BATCH_GET, params)
        if result.is_failure:
            logger.error(f"Failed to batch get items from {self.name}: {result.error}")
            return result

        unprocessed = (result.value or {}).get('UnprocessedKeys') or {}
        if unprocessed.get(self.table_name):
            pending = len(unprocessed[self.table_name].get('Keys', []))
            logger.warning(f"Batch get on {self.name} left {pending} key(s) unprocessed")

        responses = (result.value or {}).get('Responses') or {}
        items = responses.get(self.table_name) or []
        await self.notify_observers(Operation.BATCH_GET, items, params)
        return Result.success(items)

    async def put(self, item: Item, return_old: bool = False) -> Result:
        """Write ``item``, replacing any item with the same key.

        Returns:
            - a new insert: Result with ``item`` itself
            - an overwrite: Result with None, or with the previous item
              when ``return_old`` is true
        """
        params = {
            'Item': item,
            'ReturnValues': 'ALL_OLD',
        }

        result = await self.try_request(Operation.PUT, params)
        if result.is_failure:
            logger.error(f"Failed to put item in {self.name}: {result.error}")
            return result

        existing = (result.value or {}).get('Attributes') or None
        if existing is None:
            value = item
        else:
            value = existing if return_old else None

        await self.notify_observers(Operation.PUT, item, params)
        return Result.success(value)

    async def delete(self, query: Dict[str, Any]) -> Result:
        """Delete one item by key.

        Returns:
            Result whose value is the deleted item, or None if nothing was there
        """
        params = {
            'Key': self.derive_key(query),
            'ReturnValues': 'ALL_OLD',
        }

        result = await self.try_request(Operation.DELETE, params)
        if result.is_failure:
            logger.error(f"Failed to delete item from {self.name}: {result.error}")
            return result

        previous = (result.value or {}).get('Attributes') or None
        await self.notify_observers(Operation.DELETE, previous, params)
        return Result.success(previous)

    async def query(self, query_params: Dict[str, Any]) -> Result:
        """Run a Query across all pages.

        Args:
            query_params: boto3 query parameters (KeyConditionExpression,
                IndexName, FilterExpression, Limit per page, ...)

        Returns:
            Result whose value is every matching item in store order
        """
        try:
            items = await self.fetch_all_pages(query_params)
        except DynamoDBAccessorError as e:
            logger.error(f"Failed to query {self.name}: {e}")
            return Result.failure(e)

        await self.notify_observers(Operation.QUERY, items, query_params)
        return Result.success(items)
