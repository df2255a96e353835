"""
Pydantic settings for environment configuration.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BeeperSettings(BaseSettings):
    """
    Client configuration from environment variables.

    Reads from:
    1. Environment variables
    2. .env file (if given)
    3. Defaults

    Example .env file:
        BEEPER_ACCESS_TOKEN=bdt_0123456789abcdef
        BEEPER_DESKTOP_BASE_URL=http://localhost:23373
        BEEPER_DESKTOP_TIMEOUT=15
        BEEPER_DESKTOP_MAX_RETRIES=3
        BEEPER_DESKTOP_LOG_LEVEL=DEBUG

    Usage:
        >>> settings = BeeperSettings()
        >>> settings.base_url
        'http://localhost:23373'
    """

    model_config = SettingsConfigDict(
        env_prefix='BEEPER_DESKTOP_',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # The token variable has no BEEPER_DESKTOP_ prefix
    access_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('BEEPER_ACCESS_TOKEN', 'BEEPER_DESKTOP_ACCESS_TOKEN'),
    )
    base_url: str = Field(default="http://localhost:23373")
    timeout: float = Field(default=30.0, gt=0, description="Timeout of one HTTP exchange in seconds")
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_backoff: float = Field(default=1.0, ge=0)

    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_file_path: Optional[str] = None

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper() or None
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def lower_log_format(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v

    @property
    def logging_enabled(self) -> bool:
        return self.log_level is not None or self.log_file_path is not None
