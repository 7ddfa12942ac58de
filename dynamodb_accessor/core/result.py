"""Operation result type.

Every public accessor operation returns a ``Result`` instead of raising.
A result is either a success carrying a value (which may be ``None`` when
the item is absent) or a failure carrying the store error.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from ..exceptions import DynamoDBAccessorError


@dataclass(frozen=True)
class Result:
    """Outcome of a table operation.

    Attributes:
        error: The store failure, or None on success
        value: The payload on success (None means "not found"/"nothing returned")

    A result unpacks as an ``(error, value)`` pair::

        error, item = await accessor.get({"user_id": "u-1"})
    """

    error: Optional[DynamoDBAccessorError] = None
    value: Any = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Any:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def __iter__(self) -> Iterator[Any]:
        return iter((self.error, self.value))

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(error=None, value=value)

    @classmethod
    def failure(cls, error: DynamoDBAccessorError) -> "Result":
        if error is None:
            raise ValueError("A failed Result requires an error")
        return cls(error=error, value=None)
