# API endpoints
from . import projects, files, builds, ai, health

__all__ = ["projects", "files", "builds", "ai", "health"]
