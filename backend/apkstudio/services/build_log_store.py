"""
Build Log Store - one live build record per project, held in memory.

Usage:
    store = BuildLogStore()

    record = store.create(project_id)            # status=building, progress=0
    store.advance_to(project_id, 25, "[INFO] ...\\n", record.generation)
    store.complete(project_id, "[SUCCESS] ...\\n", record.generation)

    snapshot = store.get(project_id)             # None if never built

Records are replaced, never versioned: starting a new build for a project
drops the previous record and cancels any timers still attached to it.
Every start gets a store-wide increasing generation number; the typed
transitions ignore callers holding an older generation.

All access happens on the event loop thread, so no locking is done.
"""

import asyncio
import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from apkstudio.core.exceptions import InvalidBuildTransitionError
from apkstudio.schemas.build import BuildStatus


BUILD_START_LOG = "[INFO] Starting build process...\n"


@dataclass
class BuildRecord:
    """Per-project build progress"""
    project_id: str
    status: BuildStatus = BuildStatus.BUILDING
    progress: int = 0
    log: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
    generation: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


@dataclass
class _BuildEntry:
    record: BuildRecord
    timers: List[asyncio.TimerHandle] = field(default_factory=list)

    def cancel_timers(self) -> None:
        for handle in self.timers:
            handle.cancel()
        self.timers.clear()


class BuildLogStore:
    """In-memory map of project id -> current BuildRecord"""

    def __init__(self):
        self._entries: Dict[str, _BuildEntry] = {}
        self._generations = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, project_id: str) -> bool:
        return project_id in self._entries

    # ==================== Basic operations ====================

    def create(self, project_id: str) -> BuildRecord:
        """Start a fresh record, replacing (and disarming) any previous one."""
        previous = self._entries.pop(project_id, None)
        if previous is not None:
            previous.cancel_timers()

        record = BuildRecord(
            project_id=project_id,
            status=BuildStatus.BUILDING,
            progress=0,
            log=BUILD_START_LOG,
            generation=next(self._generations),
        )
        self._entries[project_id] = _BuildEntry(record=record)
        return replace(record)

    def get(self, project_id: str) -> Optional[BuildRecord]:
        """Return a snapshot of the current record, or None if never built."""
        entry = self._entries.get(project_id)
        if entry is None:
            return None
        return replace(entry.record)

    def update(
        self,
        project_id: str,
        progress: Optional[int] = None,
        log: Optional[str] = None,
        status: Optional[BuildStatus] = None,
    ) -> Optional[BuildRecord]:
        """
        Merge the given fields into the current record.

        No ordering checks are made here; use advance_to/complete for
        transitions that must keep progress monotonic.
        """
        entry = self._entries.get(project_id)
        if entry is None:
            return None

        changes = {}
        if progress is not None:
            changes["progress"] = progress
        if log is not None:
            changes["log"] = log
        if status is not None:
            changes["status"] = BuildStatus(status)

        entry.record = replace(entry.record, **changes)
        return replace(entry.record)

    def delete(self, project_id: str) -> bool:
        """Drop the record and cancel its pending timers."""
        entry = self._entries.pop(project_id, None)
        if entry is None:
            return False
        entry.cancel_timers()
        return True

    # ==================== Timers ====================

    def attach_timers(
        self,
        project_id: str,
        generation: int,
        handles: Iterable[asyncio.TimerHandle],
    ) -> bool:
        """
        Keep scheduled step handles next to the record so they are cancelled
        when the record is replaced or deleted. Handles for a generation that
        is no longer live are cancelled immediately.
        """
        handles = list(handles)
        entry = self._live_entry(project_id, generation)
        if entry is None:
            for handle in handles:
                handle.cancel()
            return False
        entry.timers.extend(handles)
        return True

    def pending_timers(self, project_id: str) -> int:
        entry = self._entries.get(project_id)
        if entry is None:
            return 0
        return sum(1 for handle in entry.timers if not handle.cancelled())

    def close(self) -> None:
        """Cancel every pending timer (application shutdown)."""
        for entry in self._entries.values():
            entry.cancel_timers()

    # ==================== Typed transitions ====================

    def advance_to(
        self,
        project_id: str,
        progress: int,
        log_line: str,
        generation: int,
    ) -> Optional[BuildRecord]:
        """
        Move a running build forward and append to its log.

        Returns None when the record is gone or belongs to a newer build.
        """
        entry = self._live_entry(project_id, generation)
        if entry is None:
            return None

        record = entry.record
        if record.is_terminal:
            raise InvalidBuildTransitionError(
                project_id, f"Build already finished with status '{record.status.value}'"
            )
        if not 0 <= progress <= 100:
            raise InvalidBuildTransitionError(project_id, f"Progress {progress} is outside 0-100")
        if progress < record.progress:
            raise InvalidBuildTransitionError(
                project_id, f"Progress cannot go back from {record.progress} to {progress}"
            )

        entry.record = replace(record, progress=progress, log=record.log + log_line)
        return replace(entry.record)

    def complete(
        self,
        project_id: str,
        log_line: str,
        generation: int,
    ) -> Optional[BuildRecord]:
        """Finish a running build successfully (progress 100)."""
        entry = self._live_entry(project_id, generation)
        if entry is None:
            return None

        record = entry.record
        if record.is_terminal:
            raise InvalidBuildTransitionError(
                project_id, f"Build already finished with status '{record.status.value}'"
            )

        entry.record = replace(
            record,
            status=BuildStatus.SUCCESS,
            progress=100,
            log=record.log + log_line,
        )
        entry.timers.clear()
        return replace(entry.record)

    def _live_entry(self, project_id: str, generation: int) -> Optional[_BuildEntry]:
        entry = self._entries.get(project_id)
        if entry is None or entry.record.generation != generation:
            return None
        return entry
