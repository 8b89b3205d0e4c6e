from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


def parse_extensions(v: Any) -> List[str]:
    """Parse extensions from string or list, normalized to '.ext' lowercase"""
    if isinstance(v, list):
        items = v
    elif isinstance(v, str):
        items = None
        if v.startswith('['):
            try:
                items = json.loads(v)
            except json.JSONDecodeError:
                items = None
        if items is None:
            items = v.split(',')
    else:
        return []

    extensions = []
    for ext in items:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        extensions.append(ext if ext.startswith('.') else f".{ext}")
    return extensions


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "APK Studio"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    # Default is an in-process SQLite database: data is lost on restart
    DATABASE_URL: str = "sqlite+aiosqlite://"
    DB_ECHO: bool = False

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://localhost:5000,http://127.0.0.1:3000,http://127.0.0.1:5000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Get CORS origins as list"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # File Uploads
    # ==========================================
    MAX_UPLOAD_SIZE: int = 52428800  # 50MB per file
    MAX_REQUEST_SIZE: int = 209715200  # 200MB per request (multi-file uploads)
    ALLOWED_EXTENSIONS_STR: str = (
        "py,pyw,zip,tar,gz,txt,md,rst,json,xml,yml,yaml,js,html,css,"
        "png,jpg,jpeg,gif,svg,mp3,wav,ogg,mp4,avi,mov,pdf,doc,docx,csv,tsv,sql,db"
    )
    BINARY_EXTENSIONS_STR: str = "zip,tar,gz,png,jpg,jpeg,gif,svg,mp3,wav,ogg,mp4,avi,mov,pdf,doc,docx"

    @property
    def ALLOWED_EXTENSIONS(self) -> List[str]:
        """Get allowed upload extensions as list"""
        return parse_extensions(self.ALLOWED_EXTENSIONS_STR)

    @property
    def BINARY_EXTENSIONS(self) -> List[str]:
        """Extensions stored as a placeholder instead of text content"""
        return parse_extensions(self.BINARY_EXTENSIONS_STR)

    # ==========================================
    # Build Simulation
    # ==========================================
    BUILD_STEP_INTERVAL_SECONDS: float = 1.0  # Delay between simulated build steps
    BUILD_POLL_INTERVAL_SECONDS: float = 1.0  # Client polling cadence while building

    # ==========================================
    # AI Providers
    # ==========================================
    AI_REQUEST_TIMEOUT: float = 120.0  # seconds
    AI_MAX_TOKENS: int = 1000
    AI_TEMPERATURE: float = 0.7
    AI_TOP_P: float = 0.9
    OLLAMA_DEFAULT_ENDPOINT: str = "http://localhost:11434/api/generate"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    OPENAI_IMAGE_SIZE: str = "1024x1024"

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    AI_RATE_LIMIT: str = "10/minute"

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    @property
    def LOG_PATH(self) -> Path:
        return Path(self.LOG_FILE)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
