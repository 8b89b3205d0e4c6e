"""
Build Progress Driver - simulates an APK build on a fixed timer schedule.

Build flow (offsets are multiples of the step interval, 1s by default):
    t+0  building   0%   Starting build process
    t+1  building  25%   Analyzing Python files / Found entry point
    t+2  building  50%   Installing dependencies / Compiling Python bytecode
    t+3  building  75%   Creating Android project structure / Packaging assets
    t+4  success  100%   Code signing / Build complete

No real work happens and nothing depends on the uploaded files. Every run
reaches SUCCESS; there is no path to ERROR.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from apkstudio.core.config import settings
from apkstudio.core.exceptions import InvalidBuildTransitionError
from apkstudio.core.logging_config import logger
from apkstudio.services.build_log_store import BuildLogStore, BuildRecord


@dataclass(frozen=True)
class BuildStep:
    """One scheduled transition of the simulated build"""
    progress: int
    lines: Tuple[str, ...]
    final: bool = False

    @property
    def log_text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


BUILD_STEPS: Tuple[BuildStep, ...] = (
    BuildStep(25, ("[INFO] Analyzing Python files...", "[INFO] Found entry point")),
    BuildStep(50, ("[INFO] Installing dependencies...", "[INFO] Compiling Python bytecode...")),
    BuildStep(75, ("[INFO] Creating Android project structure...", "[INFO] Packaging assets...")),
    BuildStep(100, ("[INFO] Code signing...", "[SUCCESS] Build complete! APK ready for download."), final=True),
)


class BuildProgressDriver:
    """
    Schedules the fixed build steps with loop.call_later.

    Timer handles are attached to the record in the store, so replacing
    or deleting the record cancels the rest of the schedule. Each callback
    also carries the generation it was scheduled for and is ignored by the
    store if a newer build has started since.
    """

    def __init__(
        self,
        store: BuildLogStore,
        step_interval: Optional[float] = None,
        steps: Sequence[BuildStep] = BUILD_STEPS,
    ):
        self.store = store
        self.step_interval = settings.BUILD_STEP_INTERVAL_SECONDS if step_interval is None else step_interval
        self.steps = tuple(steps)

    def start(self, project_id: str) -> BuildRecord:
        """Create (or replace) the project's build record and schedule its steps."""
        loop = asyncio.get_running_loop()
        record = self.store.create(project_id)

        handles = [
            loop.call_later(
                self.step_interval * index,
                self._run_step,
                project_id,
                record.generation,
                step,
            )
            for index, step in enumerate(self.steps, start=1)
        ]
        self.store.attach_timers(project_id, record.generation, handles)

        logger.log_build_event(project_id, "started", record.generation, progress=record.progress)
        return record

    def get(self, project_id: str) -> Optional[BuildRecord]:
        return self.store.get(project_id)

    def discard(self, project_id: str) -> bool:
        """Forget the project's build (project deleted)."""
        removed = self.store.delete(project_id)
        if removed:
            logger.info(f"Build record discarded for project {project_id}")
        return removed

    def shutdown(self) -> None:
        self.store.close()

    def _run_step(self, project_id: str, generation: int, step: BuildStep) -> None:
        try:
            if step.final:
                record = self.store.complete(project_id, step.log_text, generation)
            else:
                record = self.store.advance_to(project_id, step.progress, step.log_text, generation)
        except InvalidBuildTransitionError as e:
            logger.warning(f"Build step rejected for project {project_id} (gen {generation}): {e.message}")
            return

        if record is None:
            logger.debug(f"Stale build step ignored for project {project_id} (gen {generation})")
            return

        event = "completed" if step.final else "progress"
        logger.log_build_event(project_id, event, generation, progress=record.progress)
