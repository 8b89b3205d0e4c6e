"""
Build schemas for the simulated build pipeline
"""
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from enum import Enum


class BuildStatus(str, Enum):
    """
    Build status flow:
    PENDING -> BUILDING -> SUCCESS

    ERROR is part of the closed set clients render, but no build step
    produces it.
    """
    PENDING = "pending"
    BUILDING = "building"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (BuildStatus.SUCCESS, BuildStatus.ERROR)


class BuildRecordResponse(BaseModel):
    """Snapshot of a project's current build, returned by start and by polling"""
    project_id: str
    status: BuildStatus
    progress: int = Field(default=0, ge=0, le=100)
    log: str = ""
    created_at: datetime
    generation: int = Field(default=0, ge=0)

    model_config = ConfigDict(from_attributes=True)
