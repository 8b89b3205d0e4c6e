"""
Unit Tests for BuildPoller
"""
import asyncio
import pytest
from httpx import AsyncClient

from apkstudio.schemas.build import BuildStatus
from apkstudio.services.build_poller import BuildPoller

from conftest import TEST_STEP_INTERVAL, wait_until


class TestFetch:
    """Single snapshot requests"""

    async def test_fetch_before_build_returns_none(self, client: AsyncClient):
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL)

        assert await poller.fetch("never-built") is None

    async def test_fetch_returns_record(self, client: AsyncClient):
        await client.post('/api/v1/projects/p1/build')
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL)

        snapshot = await poller.fetch("p1")

        assert snapshot.project_id == "p1"
        assert snapshot.status == BuildStatus.BUILDING


class TestPoll:
    """Polling until a terminal state"""

    async def test_poll_stops_on_success(self, client: AsyncClient):
        await client.post('/api/v1/projects/p1/build')
        updates = []
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL / 2, on_update=updates.append)

        final = await asyncio.wait_for(poller.poll("p1"), timeout=3.0)

        assert final.status == BuildStatus.SUCCESS
        assert final.progress == 100
        assert updates[-1] == final
        progresses = [u.progress for u in updates]
        assert progresses == sorted(progresses)

    async def test_poll_without_build_ends_immediately(self, client: AsyncClient):
        updates = []
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL, on_update=updates.append)

        assert await poller.poll("never-built") is None
        assert updates == []

    async def test_poll_on_finished_build_makes_one_request(self, client: AsyncClient, build_store):
        await client.post('/api/v1/projects/p1/build')
        assert await wait_until(lambda: build_store.get("p1").is_terminal)
        updates = []
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL, on_update=updates.append)

        final = await poller.poll("p1")

        assert final.status == BuildStatus.SUCCESS
        assert len(updates) == 1


class TestWatch:
    """Switching the watched project"""

    async def test_watch_switch_only_reports_current_project(self, client: AsyncClient):
        await client.post('/api/v1/projects/a/build')
        await client.post('/api/v1/projects/b/build')
        updates = []
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL / 2, on_update=updates.append)

        first = poller.watch("a")
        await asyncio.sleep(TEST_STEP_INTERVAL)
        second = poller.watch("b")
        await asyncio.wait_for(second, timeout=3.0)

        assert first.cancelled()
        switch_index = next(i for i, u in enumerate(updates) if u.project_id == "b")
        assert all(u.project_id == "b" for u in updates[switch_index:])
        assert updates[-1].status == BuildStatus.SUCCESS

    async def test_watch_none_stops_polling(self, client: AsyncClient):
        await client.post('/api/v1/projects/a/build')
        poller = BuildPoller(client, interval=TEST_STEP_INTERVAL)

        task = poller.watch("a")
        assert poller.is_polling

        assert poller.watch(None) is None
        await asyncio.sleep(0)

        assert not poller.is_polling
        assert poller.current_project_id is None
        with pytest.raises(asyncio.CancelledError):
            await task
