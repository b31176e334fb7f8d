"""
Configuration settings for the Finbaba statement analyzer.
Centralized configuration management for the application.
"""

import os
from pathlib import Path
from typing import Optional


def _csv_env(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Finbaba Statement Analyzer"
    VERSION = "1.0.0"

    # File Upload Settings
    MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
    MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
    ALLOWED_FILE_TYPES: list[str] = [".csv", ".pdf", ".xlsx", ".xls", ".txt"]

    # Storage Settings
    UPLOAD_DIR: Path = Path(os.getenv("UPLOAD_DIR", "./uploads"))
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))

    # Extraction Settings
    ALLOW_ZERO_AMOUNTS: bool = os.getenv("ALLOW_ZERO_AMOUNTS", "false").lower() == "true"
    MIN_DESCRIPTION_LENGTH: int = int(os.getenv("MIN_DESCRIPTION_LENGTH", "1"))
    TEXT_ENCODINGS: list[str] = _csv_env("TEXT_ENCODINGS", "utf-8-sig,cp1252")

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "3000"))
    CORS_ORIGINS: list[str] = _csv_env("CORS_ORIGINS", "*")
    DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "default")

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def validate_file(cls, filename: str, file_size: int) -> tuple[bool, Optional[str]]:
        """
        Validate uploaded file.

        Returns:
            tuple: (is_valid, error_message)
        """
        # Check file type
        if not any(filename.lower().endswith(ext) for ext in cls.ALLOWED_FILE_TYPES):
            return False, f"Invalid file type. Allowed types: {', '.join(cls.ALLOWED_FILE_TYPES)}"

        # Check file size
        if file_size > cls.MAX_FILE_SIZE_BYTES:
            size_mb = file_size / (1024 * 1024)
            return False, f"File too large ({size_mb:.2f} MB). Maximum: {cls.MAX_FILE_SIZE_MB} MB"

        # Check if empty
        if file_size == 0:
            return False, "File is empty"

        return True, None

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "max_file_size_mb": cls.MAX_FILE_SIZE_MB,
            "allowed_file_types": list(cls.ALLOWED_FILE_TYPES),
            "upload_dir": str(cls.UPLOAD_DIR),
            "log_dir": str(cls.LOG_DIR),
            "allow_zero_amounts": cls.ALLOW_ZERO_AMOUNTS,
            "min_description_length": cls.MIN_DESCRIPTION_LENGTH,
            "text_encodings": list(cls.TEXT_ENCODINGS),
            "log_level": cls.LOG_LEVEL,
        }


# Create a singleton instance
config = Config()
