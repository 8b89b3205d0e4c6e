from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

from apkstudio.models.project import DEFAULT_VERSION, DEFAULT_TARGET_SDK, DEFAULT_ENTRY_POINT


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    package_name: str = Field(..., min_length=1, max_length=255)
    version: str = Field(DEFAULT_VERSION, min_length=1, max_length=50)
    target_sdk: str = Field(DEFAULT_TARGET_SDK, min_length=1, max_length=100)
    entry_point: str = Field(DEFAULT_ENTRY_POINT, min_length=1, max_length=255)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    package_name: Optional[str] = Field(None, min_length=1, max_length=255)
    version: Optional[str] = Field(None, min_length=1, max_length=50)
    target_sdk: Optional[str] = Field(None, min_length=1, max_length=100)
    entry_point: Optional[str] = Field(None, min_length=1, max_length=255)


class ProjectResponse(BaseModel):
    id: str
    name: str
    package_name: str
    version: str
    target_sdk: str
    entry_point: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ==================== Files ====================

class ProjectFileCreate(BaseModel):
    """Create a file by hand (uploads go through the multipart endpoint)"""
    name: str = Field(..., min_length=1, max_length=1000)
    content: str
    type: str = Field(..., min_length=1, max_length=50)
    size: int = Field(0, ge=0)


class ProjectFileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=1000)
    content: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    size: Optional[int] = Field(None, ge=0)


class ProjectFileResponse(BaseModel):
    id: str
    project_id: str
    name: str
    content: str
    type: str
    size: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

