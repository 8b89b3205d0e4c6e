"""
Request-scoped dependencies.

The build driver lives on app.state (created by create_app), and AI calls
get a fresh httpx client per request. Tests swap either one through
app.dependency_overrides.
"""

from typing import AsyncGenerator

import httpx
from fastapi import Request

from apkstudio.core.config import settings
from apkstudio.services.build_driver import BuildProgressDriver


def get_build_driver(request: Request) -> BuildProgressDriver:
    """The application's build progress driver"""
    return request.app.state.build_driver


async def get_ai_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for upstream AI providers, closed after the request"""
    async with httpx.AsyncClient(timeout=httpx.Timeout(settings.AI_REQUEST_TIMEOUT, connect=10.0)) as client:
        yield client
