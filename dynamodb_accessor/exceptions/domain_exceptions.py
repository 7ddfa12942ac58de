"""
Store failure exceptions.

Every failure the accessor reports in a failed ``Result`` is one of these.
They are grouped by what the caller can do about them:

1. Request Errors (bad keys, bad expressions)
2. Missing Resources (table or index absent)
3. Conflicts (conditional checks, transaction clashes)
4. Infrastructure and Retry Errors
"""

from typing import Any, Dict, Optional

from .base import DynamoDBAccessorError


# =============================================================================
# Request Errors
# =============================================================================

class ValidationError(DynamoDBAccessorError):
    """Raised when DynamoDB rejects the shape of a request.

    Used for:
    - ValidationException (key schema mismatch, bad expressions)
    - Item collection and account limit violations
    - Requests boto3 refuses to send (float attributes, bad parameters)
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)


# =============================================================================
# Missing Resources
# =============================================================================

class NotFoundError(DynamoDBAccessorError):
    """Raised when a table or index does not exist.

    A missing *item* is never an error: get and delete report it as a
    successful result with no value.
    """

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


# =============================================================================
# Conflicts
# =============================================================================

class ConflictError(DynamoDBAccessorError):
    """Raised when a conditional or transactional write loses to existing data."""

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


# =============================================================================
# Infrastructure and Retry Errors
# =============================================================================

class ConnectionError(DynamoDBAccessorError):
    """Raised when DynamoDB cannot be reached or the caller is not authorised.

    Also the fallback for any failure that does not map to a more
    specific class.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(DynamoDBAccessorError):
    """Raised for throttling and transient service failures.

    The accessor never retries on its own; boto3's retry budget has already
    been spent when this is reported.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)
