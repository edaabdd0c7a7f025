# core/config.py
"""
Configuration settings for squash.
"""
from typing import Optional, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Centralized application settings.
    All settings can be overridden by environment variables or a .env file.
    """
    # --- Application ---
    APP_NAME: str = "squash"
    DEBUG: bool = False

    # --- Compression ---
    COMPRESSION_ENABLED: bool = True
    COMPRESSION_FILTER: Optional[str] = None  # regex; None keeps the built-in MIME pattern
    COMPRESSION_THRESHOLD: Union[int, str] = 1024  # bytes or a size string such as "1mb"
    COMPRESSION_LEVEL: Optional[int] = None  # zlib level, -1..9

    # --- Serialization ---
    JSON_SPACES: Optional[int] = None

    @field_validator("COMPRESSION_THRESHOLD")
    def parse_threshold(cls, v):
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return v

    @field_validator("COMPRESSION_LEVEL")
    def validate_level(cls, v):
        if v is not None and not -1 <= v <= 9:
            raise ValueError("COMPRESSION_LEVEL must be between -1 and 9")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True

# Global settings instance
settings = Settings()
