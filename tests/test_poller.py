import asyncio
from unittest.mock import AsyncMock

import pytest

from turnos.client.api import APIError
from turnos.dashboard.poller import QueuePoller
from turnos.dashboard.store import DashboardState


@pytest.mark.asyncio
async def test_run_once_records_backend_errors():
    state = DashboardState()
    refresh = AsyncMock(side_effect=APIError("Error al cargar turnos", status_code=500))
    poller = QueuePoller(refresh, interval=5.0, state=state)

    ok = await poller.run_once()

    assert ok is False
    assert state.last_error == "[500] Error al cargar turnos"


@pytest.mark.asyncio
async def test_poller_keeps_running_after_failure_and_stops_cleanly():
    calls = 0
    refreshed = asyncio.Event()

    async def refresh():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise APIError("temporarily unavailable")
        refreshed.set()

    poller = QueuePoller(refresh, interval=0.01)
    poller.start()
    assert poller.running

    await asyncio.wait_for(refreshed.wait(), timeout=1.0)
    await poller.stop()

    assert calls >= 2
    assert not poller.running


@pytest.mark.asyncio
async def test_start_is_idempotent():
    refresh = AsyncMock()
    poller = QueuePoller(refresh, interval=10.0)

    poller.start()
    first = poller._task
    poller.start()

    assert poller._task is first
    await poller.stop()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        QueuePoller(AsyncMock(), interval=0)


@pytest.mark.asyncio
async def test_poller_survives_unexpected_errors():
    state = DashboardState()
    calls = 0
    recovered = asyncio.Event()

    async def refresh():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise AttributeError("'str' object has no attribute 'get'")
        recovered.set()

    poller = QueuePoller(refresh, interval=0.01, state=state)
    poller.start()

    await asyncio.wait_for(recovered.wait(), timeout=1.0)

    assert poller.running
    assert state.last_error == "'str' object has no attribute 'get'"
    await poller.stop()
    assert not poller.running


@pytest.mark.asyncio
async def test_stop_absorbs_a_task_that_already_failed():
    async def broken():
        raise RuntimeError("boom")

    poller = QueuePoller(AsyncMock(), interval=10.0)
    poller._task = asyncio.create_task(broken())
    await asyncio.sleep(0)

    await poller.stop()

    assert not poller.running
