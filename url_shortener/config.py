"""Configuration management for URL shortener."""

from typing import List, Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    data_file: str = Field(
        default="urlRecords.json",
        description="JSON file the short link table is persisted to"
    )

    storage_backend: Literal["file", "memory"] = Field(
        default="file",
        description="'file' persists to data_file; 'memory' keeps links for the process lifetime only"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=5000,
        description="Port to listen on"
    )

    cors_allow_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed by CORS"
    )

    # URL shortener settings
    service_name: str = Field(
        default="url-shortener",
        description="Service name recorded with every log event"
    )

    default_ttl_minutes: float = Field(
        default=60,
        gt=0,
        description="Validity of a short link when no positive expiry is requested"
    )

    short_code_length: int = Field(
        default=8,
        ge=4,
        description="Length of generated short codes"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    max_custom_code_length: int = Field(
        default=64,
        ge=1,
        description="Longest accepted custom short code"
    )

    max_url_length: int = Field(
        default=2048,
        ge=16,
        description="Longest accepted original link"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
