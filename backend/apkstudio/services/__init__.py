from apkstudio.services.build_log_store import BuildLogStore, BuildRecord
from apkstudio.services.build_driver import BuildProgressDriver, BuildStep, BUILD_STEPS
from apkstudio.services.build_poller import BuildPoller
from apkstudio.services.project_service import ProjectService
from apkstudio.services.ai_editor import AIEditor

__all__ = [
    # Build simulation
    "BuildLogStore",
    "BuildRecord",
    "BuildProgressDriver",
    "BuildStep",
    "BUILD_STEPS",
    "BuildPoller",
    # Projects and AI
    "ProjectService",
    "AIEditor",
]
