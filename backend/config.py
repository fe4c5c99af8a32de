# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./industrialco.db"
    PORT: int = 8080
    PING_MESSAGE: str = "ping"
    LOG_LEVEL: str = "INFO"

    # Filesystem locations for CMS documents and uploaded images
    CONTENT_DIR: str = "data/content"
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    SESSION_TTL_HOURS: int = 24

    # Serve built-in sample products when the catalog database is unreachable
    CATALOG_SAMPLE_FALLBACK: bool = True

    # Outbound mail. Without MAIL_API_URL messages are only written to the log.
    MAIL_API_URL: Optional[str] = None
    MAIL_API_KEY: Optional[str] = None
    MAIL_FROM: str = "support@industrialco.com"
    MAIL_FAILURE_RATE: float = 0.0

    DEFAULT_ADMIN_EMAIL: str = "admin@industrialco.com"
    DEFAULT_ADMIN_PASSWORD: str = "change-me-admin"

    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra = "ignore"

settings = Settings()
