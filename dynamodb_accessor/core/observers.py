"""
Best-effort observers.

An observer is an async callable ``(operation, data, params)`` notified after
a table operation succeeds. Observers run concurrently, each on its own deep
copy of the data and params, so nothing they do reaches the caller's result.
Their failures are logged and dropped.
"""

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from .operations import Operation

logger = logging.getLogger(__name__)

ObserverParams = Optional[Dict[str, Any]]
Observer = Callable[[Operation, Any, ObserverParams], Awaitable[None]]


async def _run_observer(observer: Observer, operation: Operation, data: Any, params: ObserverParams) -> None:
    # Copying and calling may both raise; keep that inside the gathered task.
    await observer(operation, copy.deepcopy(data), copy.deepcopy(params))


async def notify_observers(
    observers: Sequence[Observer],
    operation: Operation,
    data: Any,
    params: ObserverParams,
) -> None:
    """Run every observer concurrently and wait for all of them.

    Args:
        observers: Registered observer callables
        operation: The operation that triggered the notification
        data: Operation payload (usually the result value)
        params: The request parameters sent to DynamoDB

    Never raises: each failure is logged with the observer that caused it.
    """
    if not observers:
        return

    outcomes = await asyncio.gather(
        *(_run_observer(observer, operation, data, params) for observer in observers),
        return_exceptions=True,
    )

    for observer, outcome in zip(observers, outcomes):
        if isinstance(outcome, BaseException):
            name = getattr(observer, '__qualname__', repr(observer))
            logger.warning(f"Observer {name} failed on {operation.value}: {outcome!r}")
