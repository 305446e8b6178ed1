"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings

from qrsign.exceptions import ConfigError


DEFAULT_PROFILE_ABOUT_URL = "https://www.facebook.com/{profile_id}/about"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class ValidatorConfig(BaseSettings):
    """Configuration for the qrsign validator."""

    # Page fetching
    headless: bool = True
    page_timeout_ms: int = 30000
    user_agent: str | None = None
    render_pages: bool = False

    # Named profile lookup
    profile_about_url: str = DEFAULT_PROFILE_ABOUT_URL

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "QRSIGN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("profile_about_url")
    @classmethod
    def _check_profile_placeholder(cls, value: str) -> str:
        if "{profile_id}" not in value:
            raise ConfigError("profile_about_url must contain a {profile_id} placeholder")
        try:
            value.format(profile_id="x")
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(f"profile_about_url has a bad placeholder: {e}") from e
        return value
