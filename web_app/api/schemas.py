"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from kvshort.common.validators import is_valid_url, is_valid_key, MAX_URL_LENGTH


def _check_owner_key(v: str) -> str:
    is_valid, error = is_valid_key(v)
    if not is_valid:
        raise ValueError(error)
    return v


class CreateLinkRequest(BaseModel):
    """Request to shorten a URL."""

    key: str = Field(..., description="Owner key required to view stats, update or delete")
    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=MAX_URL_LENGTH)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate key length in bytes."""
        return _check_owner_key(v)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        is_valid, error = is_valid_url(v)
        if not is_valid:
            raise ValueError(error)
        return v

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "key": "abc",
                    "url": "https://example.com/very/long/path/to/resource",
                }
            ]
        }
    }


class UpdateLinkRequest(BaseModel):
    """Request to replace the owner key of a link."""

    key: str = Field(..., description="New owner key")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate key length in bytes."""
        return _check_owner_key(v)


class StatsResponse(BaseModel):
    """Access statistics for a link."""

    total_accesses: int = Field(..., ge=0, description="Number of redirects served")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Key/value store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
