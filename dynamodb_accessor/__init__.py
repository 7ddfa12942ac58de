"""
DynamoDB Table Accessor

An async key/value facade over DynamoDB tables built on boto3 and Pydantic.
Operations return a ``Result`` instead of raising, hash/range keys are built
from plain dicts, Query pagination is handled for you, and observers can be
attached for best-effort side effects.
"""

from .config import DynamoDBConfig, TableDefinition
from .exceptions import (
    ConflictError,
    ConnectionError,
    DynamoDBAccessorError,
    NotFoundError,
    RetryableError,
    ValidationError,
)
from .core import (
    Observer,
    Operation,
    Result,
    TableAccessor,
    TableGateway,
    create_table_gateway,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",
    "TableDefinition",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "DynamoDBAccessorError",
    "NotFoundError",
    "RetryableError",
    "ValidationError",

    # Accessor
    "Observer",
    "Operation",
    "Result",
    "TableAccessor",
    "TableGateway",
    "create_table_gateway",
]
