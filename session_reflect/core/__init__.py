"""Core building blocks shared by the hook and the CLI."""

from session_reflect.core.errors import (
    ConfigurationError,
    HookInputError,
    PromptLoadError,
    SessionReflectError,
    TranscriptReadError,
)
from session_reflect.core.logging import configure_logging

__all__ = [
    "ConfigurationError",
    "HookInputError",
    "PromptLoadError",
    "SessionReflectError",
    "TranscriptReadError",
    "configure_logging",
]
