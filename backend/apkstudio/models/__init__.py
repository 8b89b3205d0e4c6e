# Re-export all models for convenient imports
from apkstudio.models.project import Project
from apkstudio.models.project_file import ProjectFile

__all__ = [
    "Project",
    "ProjectFile",
]
