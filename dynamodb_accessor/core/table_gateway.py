"""
Thin DynamoDB Table Gateway

Synchronous wrapper around the boto3 DynamoDB resource for a single table.
The gateway:

1. Creates the boto3 resource and Table handle lazily, once per thread
2. Exposes the primitive calls the accessor needs (get, batch get, put,
   delete, query) as raw pass-throughs returning boto3 responses
3. Maps botocore ``ClientError`` into the accessor's exception classes

``TableGateway.request`` selects a primitive by ``Operation`` through an
explicit table of bound methods. The async ``TableAccessor`` runs these
calls in worker threads, and boto3 resources must not be shared between
threads, so each thread gets its own session, resource and Table.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import DynamoDBConfig
from ..exceptions import (
    ConflictError,
    ConnectionError,
    NotFoundError,
    RetryableError,
    ValidationError,
)
from .operations import Operation

logger = logging.getLogger(__name__)

_RETRYABLE_CODES = {
    'ProvisionedThroughputExceededException',
    'RequestLimitExceeded',
    'ThrottlingException',
    'InternalServerError',
    'ServiceUnavailable',
    'TransactionInProgressException',
    'RequestTimeoutException',
}

_CONNECTION_CODES = {
    'UnrecognizedClientException',
    'AccessDeniedException',
    'InvalidSignatureException',
    'IncompleteSignatureException',
    'ExpiredTokenException',
    'MissingAuthenticationTokenException',
}


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to the accessor's exception classes.

    Args:
        error: The boto3 ClientError
        operation: The DynamoDB API that failed (e.g., "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional hash key value for context

    Returns:
        The mapped exception (not raised)
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {full_message}", resource_id, original_error=error)

    elif error_code == 'TransactionConflictException':
        return ConflictError(f"Transaction conflict - {full_message}", resource_id, original_error=error)

    elif error_code == 'ResourceNotFoundException':
        return NotFoundError(f"Table not found - {full_message}", 'table', table_name, original_error=error)

    elif error_code == 'ValidationException':
        return ValidationError(f"Validation failed - {full_message}", original_error=error)

    elif error_code in ('ItemCollectionSizeLimitExceededException', 'LimitExceededException'):
        return ValidationError(f"Limit exceeded - {full_message}", original_error=error)

    elif error_code in _RETRYABLE_CODES:
        return RetryableError(f"Throttling or service unavailable - {full_message}", original_error=error)

    elif error_code in _CONNECTION_CODES:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


class TableGateway:
    """
    Thin gateway for one DynamoDB table.

    Methods return raw boto3 responses and raise mapped exceptions; turning
    those into results is the accessor's job.
    """

    def __init__(self, config: DynamoDBConfig, table_name: str, hash_key: Optional[str] = None):
        """Initialize table gateway.

        Args:
            config: DynamoDB configuration
            table_name: Full name of the DynamoDB table
            hash_key: Partition key name, used only for error context
        """
        self.config = config
        self.table_name = table_name
        self.hash_key = hash_key
        self._local = threading.local()

        if config.enable_debug_logging:
            logging.getLogger('dynamodb_accessor').setLevel(logging.DEBUG)

    @property
    def dynamodb(self):
        """Lazy initialization of the calling thread's DynamoDB resource."""
        dynamodb = getattr(self._local, 'dynamodb', None)
        if dynamodb is None:
            dynamodb = self._create_resource()
            self._local.dynamodb = dynamodb
        return dynamodb

    def _create_resource(self):
        try:
            session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                region_name=self.config.region_name
            )

            dynamodb_config = {
                'region_name': self.config.region_name
            }

            if self.config.endpoint_url:
                dynamodb_config['endpoint_url'] = self.config.endpoint_url

            dynamodb_config['config'] = Config(
                retries={'max_attempts': self.config.retries},
                max_pool_connections=self.config.max_pool_connections,
                read_timeout=self.config.timeout_seconds,
                connect_timeout=self.config.timeout_seconds
            )

            return session.resource('dynamodb', **dynamodb_config)
        except Exception as e:
            logger.error(f"Failed to create DynamoDB resource: {e}")
            raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e

    @property
    def table(self):
        """boto3 Table resource for this gateway's table (per thread)."""
        table = getattr(self._local, 'table', None)
        if table is None:
            try:
                table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
            self._local.table = table
        return table

    def _resource_id(self, key: Optional[Dict[str, Any]]) -> Optional[str]:
        if not key or not self.hash_key:
            return None
        value = key.get(self.hash_key)
        return str(value) if value is not None else None

    def get_item(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB GetItem.

        Args:
            **kwargs: boto3 get_item parameters (Key, ProjectionExpression, ...)

        Returns:
            Raw DynamoDB response; ``Item`` is missing when nothing matched
        """
        try:
            return self.table.get_item(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, self._resource_id(kwargs.get('Key'))) from e

    def batch_get_item(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB BatchGetItem.

        BatchGetItem is a service-level call, so it goes through the resource
        rather than the Table handle. ``RequestItems`` must be keyed by table name.

        Returns:
            Raw DynamoDB response with ``Responses`` keyed by table name
        """
        try:
            return self.dynamodb.batch_get_item(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "BatchGetItem", self.table_name) from e

    def put_item(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB PutItem.

        Example:
            gateway.put_item(
                Item={'user_id': 'u-1', 'name': 'Ada'},
                ReturnValues='ALL_OLD'
            )
        """
        try:
            response = self.table.put_item(**kwargs)
            logger.info(f"Put item in {self.table_name}: {self._resource_id(kwargs.get('Item'))}")
            return response
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, self._resource_id(kwargs.get('Item'))) from e

    def delete_item(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB DeleteItem.

        Returns:
            Raw DynamoDB response; ``Attributes`` holds the old item when
            ``ReturnValues='ALL_OLD'`` and something was deleted
        """
        try:
            response = self.table.delete_item(**kwargs)
            logger.info(f"Deleted item from {self.table_name}: {kwargs.get('Key')}")
            return response
        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, self._resource_id(kwargs.get('Key'))) from e

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute one page of a DynamoDB Query.

        Args:
            **kwargs: boto3 query parameters, including ``ExclusiveStartKey``
                when continuing from a previous page

        Returns:
            Raw DynamoDB response (``Items`` and optional ``LastEvaluatedKey``)

        Example:
            response = gateway.query(
                KeyConditionExpression=Key('user_id').eq('u-1'),
                Limit=50
            )
        """
        try:
            return self.table.query(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Query", self.table_name) from e

    def request(self, operation: Operation, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run the primitive selected by ``operation`` with ``params``."""
        handlers: Dict[Operation, Callable[..., Dict[str, Any]]] = {
            Operation.GET: self.get_item,
            Operation.BATCH_GET: self.batch_get_item,
            Operation.PUT: self.put_item,
            Operation.DELETE: self.delete_item,
            Operation.QUERY: self.query,
        }
        logger.debug(f"{operation.value} on {self.table_name}: {params}")
        return handlers[operation](**params)


def create_table_gateway(config: DynamoDBConfig, table_name: str, hash_key: Optional[str] = None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: DynamoDB configuration
        table_name: Base table name; the configured prefix is applied

    Returns:
        Configured TableGateway instance
    """
    full_table_name = config.get_table_name(table_name)
    return TableGateway(config, full_table_name, hash_key)
