"""Runtime configuration using pydantic-settings.

Configuration hierarchy:
- LoggingConfig: Logging behavior
- RuntimeSettings: Dispatch defaults (fallback framework, legacy names)
- FrameHostConfig: Main config aggregating all sub-configs

Environment variable prefix: FRAMEHOST_
Example: FRAMEHOST_RUNTIME_DEFAULT_FRAMEWORK=Vanilla
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Supports both text and JSON formats for different environments:
    - text: Human-readable for local development
    - json: Structured logging for hosts that ship logs to an aggregator
    """

    model_config = SettingsConfigDict(env_prefix="FRAMEHOST_LOGGING_")

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(default="framehost", description="Service identifier in logs")
    rate_limit_seconds: float = Field(
        default=5.0,
        description="Minimum seconds between identical non-error log messages",
    )


class RuntimeSettings(BaseSettings):
    """Dispatch runtime settings."""

    model_config = SettingsConfigDict(env_prefix="FRAMEHOST_RUNTIME_")

    default_framework: str = Field(
        default="Weex",
        description="Framework used when a bundle declares none or an unknown one",
    )
    legacy_aliases: bool = Field(
        default=True,
        description="Expose deprecated bridge names (callJS) in the method table",
    )


class FrameHostConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

    Environment variable prefix: FRAMEHOST_
    Sub-configs use their own prefixes (FRAMEHOST_LOGGING_, FRAMEHOST_RUNTIME_).
    """

    model_config = SettingsConfigDict(
        env_prefix="FRAMEHOST_",
        env_nested_delimiter="__",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)


@lru_cache
def get_config() -> FrameHostConfig:
    """Get cached configuration singleton."""
    return FrameHostConfig()
