from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./resume_builder.db"
    DEFAULT_USER_ID: int = 1  # No auth: every resume belongs to this identity
    DEFAULT_USERNAME: str = "guest"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    ASSISTANT_BACKEND: str = "simulated"  # 'simulated' or 'ollama'
    OLLAMA_MODEL: str = "llama3"

    # Client side
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT: Optional[float] = None
    DRAFT_STORAGE_DIR: Path = Path.home() / ".resume_builder"
    EXPORT_DIR: Path = Path("exports")

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(env_file=["../.env", ".env"], env_file_encoding="utf-8", extra="ignore")

settings = Settings()
