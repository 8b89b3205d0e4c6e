"""
Project Service - project and file CRUD over the async session.

Lookups that miss raise the matching *NotFoundError so the API layer
answers 404 without checking return values.
"""

from typing import List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from apkstudio.core.exceptions import ProjectFileNotFoundError, ProjectNotFoundError
from apkstudio.core.logging_config import logger
from apkstudio.models.project import Project
from apkstudio.models.project_file import ProjectFile
from apkstudio.schemas.project import (
    ProjectCreate,
    ProjectFileCreate,
    ProjectFileUpdate,
    ProjectUpdate,
)


class ProjectService:
    """Projects and their files"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========== Project Operations ==========

    async def list_projects(self) -> Sequence[Project]:
        result = await self.db.execute(
            select(Project).order_by(Project.created_at.desc())
        )
        return result.scalars().all()

    async def get_project(self, project_id: str) -> Project:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise ProjectNotFoundError(project_id)
        return project

    async def create_project(self, data: ProjectCreate) -> Project:
        project = Project(**data.model_dump())
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.info(f"Project created: {project.id} ({project.name})")
        return project

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        """Partial update: only fields present in the request are changed"""
        project = await self.get_project(project_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def delete_project(self, project_id: str) -> None:
        """Delete the project and all of its files"""
        project = await self.get_project(project_id)

        await self.db.execute(delete(ProjectFile).where(ProjectFile.project_id == project_id))
        await self.db.delete(project)
        await self.db.commit()

        logger.info(f"Project deleted: {project_id}")

    # ========== File Operations ==========

    async def list_files(self, project_id: str) -> Sequence[ProjectFile]:
        result = await self.db.execute(
            select(ProjectFile)
            .where(ProjectFile.project_id == project_id)
            .order_by(ProjectFile.name)
        )
        return result.scalars().all()

    async def get_file(self, file_id: str) -> ProjectFile:
        result = await self.db.execute(select(ProjectFile).where(ProjectFile.id == file_id))
        file = result.scalar_one_or_none()
        if not file:
            raise ProjectFileNotFoundError(file_id)
        return file

    async def create_file(self, project_id: str, data: ProjectFileCreate) -> ProjectFile:
        await self.get_project(project_id)

        file = ProjectFile(project_id=project_id, **data.model_dump())
        self.db.add(file)
        await self.db.commit()
        await self.db.refresh(file)
        return file

    async def create_files(self, project_id: str, items: List[ProjectFileCreate]) -> List[ProjectFile]:
        """Create several files in one transaction (multipart upload)"""
        await self.get_project(project_id)

        files = [ProjectFile(project_id=project_id, **item.model_dump()) for item in items]
        self.db.add_all(files)
        await self.db.commit()
        for file in files:
            await self.db.refresh(file)

        logger.info(f"Uploaded {len(files)} file(s) to project {project_id}")
        return files

    async def update_file(self, file_id: str, data: ProjectFileUpdate) -> ProjectFile:
        file = await self.get_file(file_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(file, field, value)

        await self.db.commit()
        await self.db.refresh(file)
        return file

    async def update_file_content(self, file_id: str, content: str) -> ProjectFile:
        """Replace a file's content and keep its size in step"""
        return await self.update_file(
            file_id,
            ProjectFileUpdate(content=content, size=len(content.encode("utf-8"))),
        )

    async def delete_file(self, file_id: str) -> None:
        file = await self.get_file(file_id)
        await self.db.delete(file)
        await self.db.commit()

