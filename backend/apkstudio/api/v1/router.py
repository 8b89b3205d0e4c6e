from fastapi import APIRouter
from apkstudio.api.v1.endpoints import projects, files, builds, ai, health

api_router = APIRouter()

# Liveness/readiness probes under /health
api_router.include_router(health.router)

api_router.include_router(projects.router)
api_router.include_router(builds.router)
api_router.include_router(files.router)
api_router.include_router(ai.router)
