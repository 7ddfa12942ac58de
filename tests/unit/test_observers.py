"""
Tests for observer fan-out (core/observers.py).
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from dynamodb_accessor.core.observers import notify_observers
from dynamodb_accessor.core.operations import Operation


class TestNotifyObservers:

    @pytest.mark.asyncio
    async def test_no_observers(self):
        await notify_observers([], Operation.GET, {'user_id': 'u-1'}, None)

    @pytest.mark.asyncio
    async def test_all_observers_called_with_arguments(self):
        first = AsyncMock()
        second = AsyncMock()
        params = {'Key': {'user_id': 'u-1'}}

        await notify_observers([first, second], Operation.GET, {'user_id': 'u-1'}, params)

        first.assert_awaited_once_with(Operation.GET, {'user_id': 'u-1'}, params)
        second.assert_awaited_once_with(Operation.GET, {'user_id': 'u-1'}, params)

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_siblings_complete(self, caplog):
        finished = []

        async def failing(operation, data, params):
            raise RuntimeError("observer exploded")

        async def slow(operation, data, params):
            await asyncio.sleep(0.01)
            finished.append(operation)

        await notify_observers([failing, slow], Operation.PUT, {}, None)

        assert finished == [Operation.PUT]
        assert "observer exploded" in caplog.text
        assert "failing" in caplog.text

    @pytest.mark.asyncio
    async def test_observers_run_concurrently(self):
        started = asyncio.Event()
        order = []

        async def waiter(operation, data, params):
            await asyncio.wait_for(started.wait(), timeout=1)
            order.append("waiter")

        async def releaser(operation, data, params):
            order.append("releaser")
            started.set()

        await notify_observers([waiter, releaser], Operation.DELETE, None, None)

        assert order == ["releaser", "waiter"]

    @pytest.mark.asyncio
    async def test_non_async_observer_failure_is_contained(self, caplog):
        def not_a_coroutine(operation, data, params):
            return None

        await notify_observers([not_a_coroutine], Operation.GET, None, None)

        assert "not_a_coroutine" in caplog.text

    @pytest.mark.asyncio
    async def test_each_observer_gets_its_own_copy(self):
        seen = []

        async def meddler(operation, data, params):
            data['status'] = 'tampered'
            data['tags'].append('tampered')
            params['Key']['user_id'] = 'someone-else'

        async def reader(operation, data, params):
            await asyncio.sleep(0.01)
            seen.append((data, params))

        data = {'user_id': 'u-1', 'status': 'NEW', 'tags': ['a']}
        params = {'Key': {'user_id': 'u-1'}}

        await notify_observers([meddler, reader], Operation.GET, data, params)

        assert data == {'user_id': 'u-1', 'status': 'NEW', 'tags': ['a']}
        assert params == {'Key': {'user_id': 'u-1'}}
        assert seen == [(data, params)]
