from sqlalchemy import Column, String, DateTime, Index
from datetime import datetime

from apkstudio.core.database import Base
from apkstudio.core.types import GUID, generate_uuid


DEFAULT_VERSION = "1.0.0"
DEFAULT_TARGET_SDK = "Android 13 (API 33)"
DEFAULT_ENTRY_POINT = "main.py"


class Project(Base):
    """Python app project packaged as an Android APK"""
    __tablename__ = "projects"

    __table_args__ = (
        Index('ix_projects_created_at', 'created_at'),  # Listing is newest first
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    package_name = Column(String(255), nullable=False)  # e.g., "com.example.myapp"
    version = Column(String(50), nullable=False, default=DEFAULT_VERSION)
    target_sdk = Column(String(100), nullable=False, default=DEFAULT_TARGET_SDK)
    entry_point = Column(String(255), nullable=False, default=DEFAULT_ENTRY_POINT)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Project {self.id} - {self.name}>"
