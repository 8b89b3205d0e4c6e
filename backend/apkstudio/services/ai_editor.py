"""
AI Editor - lets a model read, edit and create project files.

Actions:
- read_project  answer a question with every project file as context
- edit_file     replace one file's content with the model's reply
- create_file   ask for FILENAME/CONTENT and store the result as a new file
"""

import re
from typing import Iterable, List, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from apkstudio.core.exceptions import UnknownAIActionError, ValidationError
from apkstudio.core.logging_config import logger
from apkstudio.models.project_file import ProjectFile
from apkstudio.schemas.ai import AIEditAction, AIEditRequest, AIEditResponse, FileChange, ProviderConfig
from apkstudio.schemas.project import ProjectFileCreate
from apkstudio.services.ai_providers import get_provider
from apkstudio.services.project_service import ProjectService
from apkstudio.utils.file_types import get_file_type


FILENAME_PATTERN = re.compile(r"FILENAME:\s*(.+)")
CONTENT_PATTERN = re.compile(r"CONTENT:\s*([\s\S]+)")


def build_context_prompt(prompt: str, files: Iterable[ProjectFile]) -> str:
    """Append each file as a '=== name ===' section; unchanged when there are no files"""
    files = list(files)
    if not files:
        return prompt
    sections = "\n".join(f"=== {f.name} ===\n{f.content}\n" for f in files)
    return f"{prompt}\n\nProject Files Context:\n{sections}"


def parse_created_file(reply: str) -> Optional[tuple]:
    """Extract (filename, content) from a create_file reply, or None"""
    filename_match = FILENAME_PATTERN.search(reply)
    content_match = CONTENT_PATTERN.search(reply)
    if not filename_match or not content_match:
        return None
    return filename_match.group(1).strip(), content_match.group(1).strip()


async def call_with_context(
    client: httpx.AsyncClient,
    prompt: str,
    system_prompt: str,
    config: ProviderConfig,
    files: Iterable[ProjectFile] = (),
) -> str:
    provider = get_provider(config.provider, client)
    return await provider.complete(build_context_prompt(prompt, files), system_prompt, config)


class AIEditor:
    """Runs AI editor actions against a project's files"""

    def __init__(self, db: AsyncSession, client: httpx.AsyncClient):
        self.projects = ProjectService(db)
        self.client = client

    async def run(self, request: AIEditRequest) -> AIEditResponse:
        try:
            action = AIEditAction(request.action)
        except ValueError:
            raise UnknownAIActionError(request.action) from None

        logger.info(f"AI edit action '{action.value}' (provider: {request.ai_config.provider})")

        if action == AIEditAction.READ_PROJECT:
            return await self.read_project(request)
        if action == AIEditAction.EDIT_FILE:
            return await self.edit_file(request)
        return await self.create_file(request)

    async def read_project(self, request: AIEditRequest) -> AIEditResponse:
        project_id = self._require(request.project_id, "project_id")
        await self.projects.get_project(project_id)
        files = await self.projects.list_files(project_id)

        structure = "\n".join(f"- {f.name} ({f.type})" for f in files)
        system_prompt = (
            "You are an AI assistant that can edit code directly. You have access to the project files.\n"
            f"Current project structure:\n{structure}\n\n"
            "When the user asks you to make changes:\n"
            "1. Read and understand the current code\n"
            "2. Make specific, targeted changes\n"
            "3. Respond with the changes made and reasoning\n"
            "4. Use proper error handling and maintain code quality"
        )

        reply = await call_with_context(
            self.client, request.instructions, system_prompt, request.ai_config, files
        )
        return AIEditResponse(response=reply)

    async def edit_file(self, request: AIEditRequest) -> AIEditResponse:
        file_id = self._require(request.file_id, "file_id")
        target = await self.projects.get_file(file_id)

        prompt = (
            f'You are editing the file "{target.name}".\n'
            f"Current file content:\n```{target.type}\n{target.content}\n```\n\n"
            f"User request: {request.instructions}\n\n"
            "Provide the complete updated file content. Maintain proper formatting and syntax."
        )
        new_content = await call_with_context(self.client, prompt, "", request.ai_config)

        updated = await self.projects.update_file_content(file_id, new_content)
        return AIEditResponse(
            response=f'File "{updated.name}" updated successfully. Changes made: {request.instructions}',
            file_changes=[FileChange(file_id=updated.id, file_name=updated.name, action="modified")],
        )

    async def create_file(self, request: AIEditRequest) -> AIEditResponse:
        project_id = self._require(request.project_id, "project_id")
        await self.projects.get_project(project_id)

        prompt = (
            "Create a new file for the project.\n"
            f"User request: {request.instructions}\n\n"
            "Provide:\n"
            "1. Suggested filename with extension\n"
            "2. Complete file content\n"
            "3. Brief description of what the file does\n\n"
            "Format your response as:\n"
            "FILENAME: [filename]\n"
            "DESCRIPTION: [description]\n"
            "CONTENT:\n"
            "[file content]"
        )
        reply = await call_with_context(self.client, prompt, "", request.ai_config)

        parsed = parse_created_file(reply)
        if parsed is None:
            # Nothing to create; relay the reply as-is
            return AIEditResponse(response=reply)

        filename, content = parsed
        created = await self.projects.create_file(
            project_id,
            ProjectFileCreate(
                name=filename,
                content=content,
                type=get_file_type(filename),
                size=len(content.encode("utf-8")),
            ),
        )
        changes: List[FileChange] = [
            FileChange(file_id=created.id, file_name=created.name, action="created")
        ]
        return AIEditResponse(response=f'Created new file "{filename}". {reply}', file_changes=changes)

    @staticmethod
    def _require(value: Optional[str], field: str) -> str:
        if not value:
            raise ValidationError(f"'{field}' is required for this action", field=field)
        return value
