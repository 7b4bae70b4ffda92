"""
Pydantic settings for environment-driven configuration.
"""

from typing import FrozenSet, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import BACKOFF_TYPES


class RequestHelperSettings(BaseSettings):
    """
    request-helper configuration from environment variables.

    Reads from:
    1. Environment variables (REQUEST_HELPER_*)
    2. .env file
    3. Defaults

    Example .env file:
        REQUEST_HELPER_BASE_URL=https://api.example.com
        REQUEST_HELPER_TIMEOUT=10
        REQUEST_HELPER_RETRY=3
        REQUEST_HELPER_BACKOFF_TYPE=exponential
        REQUEST_HELPER_RETRY_STATUS_CODES=[429, 503]
        REQUEST_HELPER_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='REQUEST_HELPER_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default="", description="Base URL for relative request URLs")
    timeout: Optional[float] = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verbose: bool = Field(default=False)
    stats_enabled: bool = Field(default=True)
    response_type: Literal["auto", "json", "text", "bytes", "ndjson", "xml", "html"] = Field(default="auto")

    # Carried to the external retry engine
    retry: int = Field(default=0, ge=0, le=10)
    retry_delay: float = Field(default=1.0, ge=0)
    backoff_type: Optional[str] = Field(default=None)
    retry_status_codes: FrozenSet[int] = Field(
        default_factory=lambda: frozenset({408, 429, 500, 502, 503, 504})
    )

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_file_path: Optional[str] = None

    @field_validator('backoff_type')
    @classmethod
    def validate_backoff_type(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in BACKOFF_TYPES:
            raise ValueError(f"backoff_type must be one of {sorted(BACKOFF_TYPES)}")
        return v

    @field_validator('retry_status_codes')
    @classmethod
    def validate_status_codes(cls, v: FrozenSet[int]) -> FrozenSet[int]:
        bad = sorted(code for code in v if not 100 <= code <= 599)
        if bad:
            raise ValueError(f"Invalid HTTP status codes: {bad}")
        return v
