"""
AI proxy schemas - chat/code/image requests and the AI file editor
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum


class AIRequestType(str, Enum):
    """Kind of AI request; selects the system prompt"""
    CHAT = "chat"
    CODE = "code"
    IMAGE = "image"


class AIEditAction(str, Enum):
    READ_PROJECT = "read_project"
    EDIT_FILE = "edit_file"
    CREATE_FILE = "create_file"


class ProviderConfig(BaseModel):
    """Per-request provider settings supplied by the client"""
    provider: Optional[str] = None  # Used by the AI editor, which has no top-level provider
    api_key: Optional[str] = None
    model: Optional[str] = None
    endpoint: Optional[str] = None


class AIRequest(BaseModel):
    provider: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    type: AIRequestType = AIRequestType.CHAT
    config: ProviderConfig = Field(default_factory=ProviderConfig)


class AIResponse(BaseModel):
    response: str
    image_url: Optional[str] = None


class AIEditRequest(BaseModel):
    # Kept as a plain string so unknown actions get a domain 400, not a 422
    action: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)
    project_id: Optional[str] = None
    file_id: Optional[str] = None
    ai_config: ProviderConfig = Field(default_factory=ProviderConfig)


class FileChange(BaseModel):
    file_id: str
    file_name: str
    action: str  # "modified" or "created"


class AIEditResponse(BaseModel):
    response: str
    file_changes: List[FileChange] = Field(default_factory=list)
