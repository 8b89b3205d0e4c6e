"""
Build Poller - client side of the build status contract.

Polls GET /projects/{id}/build on a fixed cadence while the build is
running and stops as soon as a terminal status is seen. Only one project
is watched at a time; switching projects cancels the previous poll.

Usage:
    async with httpx.AsyncClient(base_url="http://localhost:8000") as client:
        poller = BuildPoller(client, on_update=render)
        final = await poller.poll(project_id)

        # or, from a UI that changes the selected project:
        poller.watch(project_id)
        poller.watch(other_project_id)   # stops the first poll
        poller.watch(None)               # nothing selected, stop polling
"""

import asyncio
from typing import Callable, Optional

import httpx

from apkstudio.core.config import settings
from apkstudio.core.logging_config import logger
from apkstudio.schemas.build import BuildRecordResponse, BuildStatus


class BuildPoller:
    """Polls a project's build record until it reaches a terminal state"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        interval: Optional[float] = None,
        on_update: Optional[Callable[[BuildRecordResponse], None]] = None,
        api_prefix: str = f"/api/{settings.API_VERSION}",
    ):
        self.client = client
        self.interval = settings.BUILD_POLL_INTERVAL_SECONDS if interval is None else interval
        self.on_update = on_update
        self.api_prefix = api_prefix.rstrip("/")
        self.current_project_id: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    async def fetch(self, project_id: str) -> Optional[BuildRecordResponse]:
        """Fetch one snapshot; None if the project has never been built."""
        response = await self.client.get(f"{self.api_prefix}/projects/{project_id}/build")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return BuildRecordResponse.model_validate(response.json())

    async def poll(self, project_id: str) -> Optional[BuildRecordResponse]:
        """
        Poll until the build is no longer BUILDING.

        Returns the last snapshot seen, or None if there is no build.
        """
        last: Optional[BuildRecordResponse] = None
        while True:
            snapshot = await self.fetch(project_id)
            if snapshot is None:
                return last

            if snapshot.project_id == project_id and self._is_current(project_id):
                last = snapshot
                if self.on_update:
                    self.on_update(snapshot)

            if snapshot.status != BuildStatus.BUILDING:
                logger.debug(f"Polling stopped for project {project_id}: {snapshot.status.value}")
                return last

            await asyncio.sleep(self.interval)

    def watch(self, project_id: Optional[str]) -> Optional[asyncio.Task]:
        """Switch the observed project, restarting the poll loop."""
        self.stop()
        self.current_project_id = project_id
        if project_id is None:
            return None
        self._task = asyncio.create_task(self.poll(project_id))
        return self._task

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.current_project_id = None

    @property
    def is_polling(self) -> bool:
        return self._task is not None and not self._task.done()

    def _is_current(self, project_id: str) -> bool:
        # Direct poll() calls have no watched project and always deliver
        return self.current_project_id is None or self.current_project_id == project_id
