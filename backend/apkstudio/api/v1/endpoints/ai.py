"""
AI API - provider proxy and AI file editor

Endpoints:
- POST /ai      - Forward a chat/code/image prompt to a provider (rate limited)
- POST /ai/edit - read_project / edit_file / create_file (rate limited)
"""

import httpx
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from apkstudio.core.database import get_db
from apkstudio.core.dependencies import get_ai_client
from apkstudio.core.rate_limiter import ai_operation_rate_limit
from apkstudio.schemas.ai import AIEditRequest, AIEditResponse, AIRequest, AIRequestType, AIResponse
from apkstudio.services.ai_editor import AIEditor
from apkstudio.services.ai_providers import OpenAIProvider, get_provider, system_prompt_for

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post("", response_model=AIResponse)
@ai_operation_rate_limit()
async def ai_request(
    request: Request,
    ai_data: AIRequest,
    client: httpx.AsyncClient = Depends(get_ai_client)
):
    """
    Relay a prompt to the selected provider and return its reply unchanged.

    type=image is only meaningful for openai, which answers with an image URL.
    Other providers treat it as chat.
    """
    provider = get_provider(ai_data.provider, client)

    if ai_data.type == AIRequestType.IMAGE and isinstance(provider, OpenAIProvider):
        image_url = await provider.generate_image(ai_data.content, ai_data.config)
        return AIResponse(response="Image generated successfully", image_url=image_url)

    reply = await provider.complete(ai_data.content, system_prompt_for(ai_data.type), ai_data.config)
    return AIResponse(response=reply)


@router.post("/edit", response_model=AIEditResponse)
@ai_operation_rate_limit()
async def ai_edit(
    request: Request,
    edit_data: AIEditRequest,
    db: AsyncSession = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_ai_client)
):
    return await AIEditor(db, client).run(edit_data)
