# Base exception class
from .base import DynamoDBAccessorError

# Store failure exceptions
from .domain_exceptions import (
    ValidationError,
    NotFoundError,
    ConflictError,
    ConnectionError,
    RetryableError,
)

__all__ = [
    # Base exception
    "DynamoDBAccessorError",

    # Store failures (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "NotFoundError",
    "RetryableError",
    "ValidationError",
]
