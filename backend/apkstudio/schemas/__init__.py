from apkstudio.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectFileCreate,
    ProjectFileUpdate,
    ProjectFileResponse,
)
from apkstudio.schemas.build import BuildStatus, BuildRecordResponse
from apkstudio.schemas.ai import (
    AIRequestType,
    AIEditAction,
    ProviderConfig,
    AIRequest,
    AIResponse,
    AIEditRequest,
    AIEditResponse,
    FileChange,
)

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectFileCreate",
    "ProjectFileUpdate",
    "ProjectFileResponse",
    "BuildStatus",
    "BuildRecordResponse",
    "AIRequestType",
    "AIEditAction",
    "ProviderConfig",
    "AIRequest",
    "AIResponse",
    "AIEditRequest",
    "AIEditResponse",
    "FileChange",
]
