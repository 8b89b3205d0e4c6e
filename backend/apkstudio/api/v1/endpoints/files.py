"""
Files API - single-file access by id

Endpoints:
- GET    /files/{file_id} - Get file with content
- PUT    /files/{file_id} - Partial update
- DELETE /files/{file_id} - Delete file
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from apkstudio.core.database import get_db
from apkstudio.schemas.project import ProjectFileUpdate, ProjectFileResponse
from apkstudio.services.project_service import ProjectService

router = APIRouter(prefix="/files", tags=["Files"])


@router.get("/{file_id}", response_model=ProjectFileResponse)
async def get_file(file_id: str, db: AsyncSession = Depends(get_db)):
    return await ProjectService(db).get_file(file_id)


@router.put("/{file_id}", response_model=ProjectFileResponse)
async def update_file(file_id: str, file_data: ProjectFileUpdate, db: AsyncSession = Depends(get_db)):
    return await ProjectService(db).update_file(file_id, file_data)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(file_id: str, db: AsyncSession = Depends(get_db)):
    await ProjectService(db).delete_file(file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
