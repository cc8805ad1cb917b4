"""Configuration management for kvshort."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Store settings
    store_url: str = Field(
        default="redis://localhost:6379/0",
        description="Key/value store URL (redis://, rediss://, unix:// or memory://)"
    )

    key_prefix: str = Field(
        default="kvshort",
        description="Namespace prepended to every store key"
    )

    store_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Per-call timeout for store operations"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes"
    )

    # Link settings
    slug_length: int = Field(
        default=21,
        ge=8,
        description="Length of generated slugs"
    )

    max_key_bytes: int = Field(
        default=64,
        ge=1,
        le=64,
        description="Maximum UTF-8 length of owner keys"
    )

    idle_ttl_seconds: int = Field(
        default=0,
        ge=0,
        description=(
            "Delete links not redirected to for this many seconds. "
            "0 disables expiry; 604800 gives the 7-day policy."
        )
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
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
