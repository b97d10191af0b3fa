"""Configuration system for session-reflect."""

import os
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from session_reflect.core.errors import ConfigurationError

DEFAULT_PROMPT_PATH = "Vaults/Personal/Orchestration/Patterns/Session Reflect.md"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """session-reflect configuration.

    Only where the hook looks and how it reports are configurable.  The
    stop thresholds and memory path markers are policy constants in
    ``session_reflect.hooks``.
    """

    # Scope
    scope_subpath: str = Field(
        default="Data",
        description="Directory under $HOME that sessions must be rooted in",
    )

    # Reflection prompt
    prompt_path: str = Field(
        default=DEFAULT_PROMPT_PATH,
        description="Markdown reflection prompt, relative to the session cwd",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines on stderr",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for hook-errors.log (disabled when unset)",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @field_validator("prompt_path")
    @classmethod
    def _relative_prompt_path(cls, value: str) -> str:
        if not value or Path(value).is_absolute():
            raise ValueError("prompt_path must be a non-empty relative path")
        return value

    model_config = {
        "env_prefix": "SESSION_REFLECT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    def scope_root(self, home: str | None = None) -> str:
        """Return ``<home>/<scope_subpath>``.

        *home* defaults to ``$HOME`` read at call time; an unset variable
        counts as the empty string.
        """
        if home is None:
            home = os.environ.get("HOME", "")
        return f"{home}/{self.scope_subpath}"


# Settings singleton with dependency injection support
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings instance (lazy-loaded singleton).

    Returns:
        The Settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid session-reflect settings: {e}") from e
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override the settings instance (for testing).

    Args:
        new_settings: The new Settings instance to use.
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to None (forces reload on next get_settings call)."""
    global _settings
    _settings = None


def settings_summary(settings: Settings) -> dict[str, Any]:
    """Flat view of the active settings for the CLI."""
    return {
        "scope_root": settings.scope_root(),
        "prompt_path": settings.prompt_path,
        "log_level": settings.log_level,
        "log_json": settings.log_json,
        "log_dir": str(settings.log_dir) if settings.log_dir else None,
    }
