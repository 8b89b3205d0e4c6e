"""
Projects API - project CRUD plus the files that belong to a project

Endpoints:
- GET    /projects                            - List projects (newest first)
- POST   /projects                            - Create project
- GET    /projects/{project_id}               - Get project
- PUT    /projects/{project_id}               - Partial update
- DELETE /projects/{project_id}               - Delete project, its files and its build
- GET    /projects/{project_id}/files         - List files (by name)
- POST   /projects/{project_id}/files         - Create a file from JSON
- POST   /projects/{project_id}/files/upload  - Multipart upload (field "files")
"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from apkstudio.core.config import settings
from apkstudio.core.database import get_db
from apkstudio.core.dependencies import get_build_driver
from apkstudio.core.exceptions import FileTooLargeError, InvalidFileTypeError, ValidationError
from apkstudio.core.logging_config import logger
from apkstudio.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectFileCreate,
    ProjectFileResponse,
)
from apkstudio.services.build_driver import BuildProgressDriver
from apkstudio.services.project_service import ProjectService
from apkstudio.utils.file_types import (
    UPLOAD_FILE_TYPE,
    build_upload_content,
    get_extension,
    is_allowed_extension,
)

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=List[ProjectResponse])
async def list_projects(db: AsyncSession = Depends(get_db)):
    return await ProjectService(db).list_projects()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(project_data: ProjectCreate, db: AsyncSession = Depends(get_db)):
    """Create a new project. Version, target SDK and entry point have defaults."""
    return await ProjectService(db).create_project(project_data)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, db: AsyncSession = Depends(get_db)):
    return await ProjectService(db).get_project(project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await ProjectService(db).update_project(project_id, project_data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    driver: BuildProgressDriver = Depends(get_build_driver)
):
    """Delete the project; its files and build record go with it."""
    await ProjectService(db).delete_project(project_id)
    driver.discard(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==================== Files ====================

@router.get("/{project_id}/files", response_model=List[ProjectFileResponse])
async def list_project_files(project_id: str, db: AsyncSession = Depends(get_db)):
    return await ProjectService(db).list_files(project_id)


@router.post("/{project_id}/files", response_model=ProjectFileResponse, status_code=status.HTTP_201_CREATED)
async def create_project_file(
    project_id: str,
    file_data: ProjectFileCreate,
    db: AsyncSession = Depends(get_db)
):
    return await ProjectService(db).create_file(project_id, file_data)


@router.post(
    "/{project_id}/files/upload",
    response_model=List[ProjectFileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_project_files(
    project_id: str,
    files: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db)
):
    """
    Upload one or more files into a project.

    Every file is checked before anything is stored, so a rejected file
    fails the whole upload. Binary formats are stored as a placeholder.
    """
    if not files:
        raise ValidationError("No files uploaded", field="files")

    items = []
    for upload in files:
        filename = upload.filename or ""
        if not is_allowed_extension(filename):
            raise InvalidFileTypeError(filename, get_extension(filename) or "(none)", settings.ALLOWED_EXTENSIONS)

        data = await upload.read()
        if len(data) > settings.MAX_UPLOAD_SIZE:
            raise FileTooLargeError(filename, len(data), settings.MAX_UPLOAD_SIZE)

        items.append(ProjectFileCreate(
            name=filename,
            content=build_upload_content(filename, data),
            type=UPLOAD_FILE_TYPE,
            size=len(data),
        ))

    logger.debug(f"Upload accepted for project {project_id}: {[item.name for item in items]}")
    return await ProjectService(db).create_files(project_id, items)
