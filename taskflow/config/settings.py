"""
Application settings and configuration
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Optional
from taskflow.config.constants import DEFAULT_TASKS_FILE

# Load environment variables from .env file in the working directory
env_path = Path.cwd() / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""

    # Storage
    TASKS_FILE_PATH: str = os.getenv("TASKS_FILE_PATH", str(Path.cwd() / DEFAULT_TASKS_FILE))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE", None)

    # Terminal colors
    NO_COLOR: bool = os.getenv("NO_COLOR") is not None
    FORCE_COLOR: bool = os.getenv("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}

    @classmethod
    def validate(cls) -> bool:
        """Validate that settings hold usable values"""
        level = getattr(logging, cls.LOG_LEVEL.upper(), None)
        if not isinstance(level, int):
            raise ValueError(f"Invalid LOG_LEVEL: {cls.LOG_LEVEL}")

        if not cls.TASKS_FILE_PATH:
            raise ValueError("TASKS_FILE_PATH must not be empty")

        return True


# Global settings instance
settings = Settings()
