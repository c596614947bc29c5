"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import AliasChoices, AliasPath, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from smartmedia.application.use_cases.resolve_stream import DEFAULT_STREAM_USER_AGENT
from smartmedia.infrastructure.hoster_resolvers.youtube import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_CLIENT_VERSION,
    DEFAULT_PLAYER_API_URL,
)

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class ExtractionConfig(BaseModel):
    """Playback-config extraction against the hosted site's player API.

    All values configurable via YAML (extraction section) or ENV vars.
    """

    player_api_url: str = Field(
        default=DEFAULT_PLAYER_API_URL,
        description="Player API endpoint returning the playback configuration.",
    )
    client_name: str = Field(
        default=DEFAULT_CLIENT_NAME,
        description="Client name sent in the player request context.",
    )
    client_version: str = Field(
        default=DEFAULT_CLIENT_VERSION,
        description="Client version sent in the player request context.",
    )
    request_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for one player API request (seconds).",
    )
    stream_user_agent: str = Field(
        default=DEFAULT_STREAM_USER_AGENT,
        description="Browser User-Agent required when fetching progressive streams.",
    )

    @field_validator("request_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        return v


class SummaryConfig(BaseModel):
    """Generative summary settings."""

    model: str = Field(default="gemini-2.0-flash", description="Gemini model name.")
    gemini_api_key: str | None = Field(
        default=None,
        description="Gemini API key. Summaries are disabled when unset.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/extraction/summary/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="smartmedia", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Default HTTP timeout in seconds.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default="SmartMedia/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
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

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "extraction": self.extraction.model_dump(),
            "summary": self.summary.model_dump(exclude={"gemini_api_key"}),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read SMARTMEDIA_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - SMARTMEDIA_HTTP_TIMEOUT_SECONDS
    - SMARTMEDIA_LOG_LEVEL
    - SMARTMEDIA_STREAM_USER_AGENT
    - SMARTMEDIA_GEMINI_API_KEY (or GEMINI_API_KEY)
    """

    model_config = SettingsConfigDict(
        env_prefix="SMARTMEDIA_",
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

    player_api_url: Optional[str] = None
    client_name: Optional[str] = None
    client_version: Optional[str] = None
    request_timeout_seconds: Optional[float] = None
    stream_user_agent: Optional[str] = None

    summary_model: Optional[str] = None
    # The bare GEMINI_API_KEY used by the google-genai SDK is accepted too
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SMARTMEDIA_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
