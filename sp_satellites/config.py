"""
Settings for the SharePoint satellite list client.

Read from the environment (or a local `.env`): the SharePoint site and list,
an optional digest or bearer token, HTTP timeout and logging switches.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # SharePoint
    site_url: str = Field("", alias="SP_SITE_URL")
    list_name: str = Field("Satellite_Fixed", alias="SP_LIST_NAME")
    request_digest: Optional[str] = Field(None, alias="SP_REQUEST_DIGEST")
    access_token: Optional[str] = Field(None, alias="SP_ACCESS_TOKEN")
    default_top: int = Field(100, alias="SP_DEFAULT_TOP")

    # HTTP transport
    http_timeout_seconds: float = Field(30.0, alias="HTTP_TIMEOUT_SECONDS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("site_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Process-wide settings, parsed once.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
