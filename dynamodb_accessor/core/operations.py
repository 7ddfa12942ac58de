from enum import Enum


class Operation(str, Enum):
    """Primitive table operations.

    Used both to select the gateway call in ``TableGateway.request`` and to
    tell observers what just happened.
    """

    GET = "GET"
    BATCH_GET = "BATCH_GET"
    PUT = "PUT"
    DELETE = "DELETE"
    QUERY = "QUERY"
