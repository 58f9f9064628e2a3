"""
Configuration Module

This module provides configuration settings for the application.
It loads environment variables from a .env file and provides default values.

"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables with defaults.
    Settings are validated using Pydantic's BaseSettings.
    """

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "../../../.env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Allow extra fields from .env file
    )

    # Core settings
    PROJECT_NAME: str = "VentureScope"
    VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"

    # CORS Settings (comma-separated in the environment)
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8501"

    # You.com Agents API configuration
    YOU_API_KEY: str = ""
    AGENTS_URL: str = "https://api.you.com/v1/agents/runs"
    AGENT_NAME: str = "advanced"
    AGENT_VERBOSITY: str = "medium"
    AGENT_MAX_WORKFLOW_STEPS: int = 5
    AGENT_TIMEOUT_SECONDS: float = 300.0

    # Logging configuration
    LOG_LEVEL: str = "INFO"

    # Session persistence: "file" or "redis"
    SESSION_BACKEND: str = "file"
    REDIS_URL: str = "redis://localhost:6379/0"

    # Backend address used by the Streamlit client
    API_BASE_URL: str = "http://localhost:8000"

    # Get project root directory
    PROJECT_ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../"))

    # Data directories; the sub-directories default to locations under DATA_DIR
    DATA_DIR: str = os.path.join(PROJECT_ROOT, "data")
    SESSIONS_DIR: Optional[str] = None
    LOGS_DIR: Optional[str] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.SESSIONS_DIR:
            self.SESSIONS_DIR = os.path.join(self.DATA_DIR, "sessions")
        if not self.LOGS_DIR:
            self.LOGS_DIR = os.path.join(self.DATA_DIR, "logs")
        # Create all data directories
        for dir_path in [self.DATA_DIR, self.SESSIONS_DIR, self.LOGS_DIR]:
            os.makedirs(dir_path, exist_ok=True)

    @field_validator("SESSION_BACKEND")
    @classmethod
    def validate_session_backend(cls, v: str) -> str:
        """Validate that the session backend is one of the supported stores."""
        v = v.lower().strip()
        if v not in ("file", "redis"):
            raise ValueError("SESSION_BACKEND must be 'file' or 'redis'")
        return v

    @field_validator("AGENT_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the per-call deadline is positive."""
        if v <= 0:
            raise ValueError("AGENT_TIMEOUT_SECONDS must be positive")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT.lower() == "development"


# Create settings instance
settings = Settings()
