from sqlalchemy import Column, String, DateTime, Integer, Text, ForeignKey, Index
from datetime import datetime

from apkstudio.core.database import Base
from apkstudio.core.types import GUID, generate_uuid


class ProjectFile(Base):
    """
    Project File model - content is stored inline as text.

    Binary uploads are stored as a "[BINARY FILE: ...]" placeholder,
    so `content` is always readable text.
    """
    __tablename__ = "project_files"

    __table_args__ = (
        Index('ix_project_files_project_id', 'project_id'),  # Most queries filter by project
        Index('ix_project_files_project_name', 'project_id', 'name'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    project_id = Column(GUID, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(1000), nullable=False)  # e.g., "main.py"
    content = Column(Text, nullable=False, default="")
    type = Column(String(50), nullable=False)  # "file", "folder" or a language, e.g. "python"
    size = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<ProjectFile {self.name}>"
