"""
Builds API - simulated APK build

Endpoints:
- POST /projects/{project_id}/build - Start (or restart) the build, returns the initial record
- GET  /projects/{project_id}/build - Current build record, 404 before the first build

The project id is not looked up; a build can be started for any id.
Clients poll the GET endpoint until status is no longer "building".
"""

from fastapi import APIRouter, Depends

from apkstudio.core.dependencies import get_build_driver
from apkstudio.core.exceptions import BuildNotFoundError
from apkstudio.schemas.build import BuildRecordResponse
from apkstudio.services.build_driver import BuildProgressDriver

router = APIRouter(prefix="/projects", tags=["Builds"])


@router.post("/{project_id}/build", response_model=BuildRecordResponse)
async def start_build(project_id: str, driver: BuildProgressDriver = Depends(get_build_driver)):
    record = driver.start(project_id)
    return BuildRecordResponse.model_validate(record)


@router.get("/{project_id}/build", response_model=BuildRecordResponse)
async def get_build(project_id: str, driver: BuildProgressDriver = Depends(get_build_driver)):
    record = driver.get(project_id)
    if record is None:
        raise BuildNotFoundError(project_id)
    return BuildRecordResponse.model_validate(record)
