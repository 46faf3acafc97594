# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"
    FRONTEND_URL: Optional[str] = None

    # Insert the demo products on startup when the table is empty
    SEED_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"

    # Audit rows kept in the logs table; older ones are pruned on write
    AUDIT_LOG_RETENTION: int = 10000

    # Default base URL used by the API client
    API_BASE_URL: str = "http://127.0.0.1:8000"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
