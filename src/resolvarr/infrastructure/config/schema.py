"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class AppConfig(BaseModel):
    """
    Final, validated application configuration.

    YAML files use the sectioned shape (http/logging/providers); the flat
    field names below are what the rest of the code reads.
    """

    app_name: str = Field(default="resolvarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-request timeout for host and aggregator pages.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether the shared HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent sent to hosts (browser-like, hosts block bots).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Provider directory (YAML section: providers.*)
    providers_source_url: str = Field(
        default=(
            "https://raw.githubusercontent.com/himanshu8443/providers/main/"
            "modflix.json"
        ),
        validation_alias=AliasChoices(
            "providers_source_url",
            AliasPath("providers", "source_url"),
        ),
        description="JSON document mapping provider keys to base URLs.",
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("providers_source_url")
    @classmethod
    def _validate_source_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("providers_source_url must be an http(s) URL")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # console in dev/test, json in prod
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """Dump configuration in the sectioned shape used by config.yaml."""
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "providers": {"source_url": self.providers_source_url},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Read by load.py as the ENV layer; only values that are actually set
    take part in the merge.

    Examples:
    - RESOLVARR_HTTP_TIMEOUT_SECONDS
    - RESOLVARR_LOG_LEVEL
    - RESOLVARR_PROVIDERS_SOURCE_URL
    """

    model_config = SettingsConfigDict(
        env_prefix="RESOLVARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    providers_source_url: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Return only values that were provided (non-None), for merging."""
        return self.model_dump(exclude_none=True)
