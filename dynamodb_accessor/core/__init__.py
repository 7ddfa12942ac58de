"""
Core components for DynamoDB table access.

- TableAccessor: async get/batch get/put/delete/query returning Results
- TableGateway: thin synchronous wrapper over boto3 for one table
- Result, Operation, observers: the types the accessor speaks in
"""

from .observers import Observer, notify_observers
from .operations import Operation
from .result import Result
from .table_accessor import TableAccessor
from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error

__all__ = [
    "Observer",
    "Operation",
    "Result",
    "TableAccessor",
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
    "notify_observers",
]
