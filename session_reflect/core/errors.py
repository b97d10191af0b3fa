"""Custom exceptions for session-reflect."""

from pathlib import Path


def sanitize_path_for_error(path: str | Path) -> str:
    """Extract only the filename from a path for safe error messages.

    Transcript and vault paths live under the user's home directory, so
    error messages and the hook error log only ever carry the filename.

    Args:
        path: Full path or filename.

    Returns:
        Just the filename portion.
    """
    if isinstance(path, Path):
        return path.name
    return Path(path).name


class SessionReflectError(Exception):
    """Base exception for all session-reflect errors."""

    pass


class HookInputError(SessionReflectError):
    """Raised when the hook payload on stdin cannot be read or decoded."""

    pass


class TranscriptReadError(SessionReflectError):
    """Raised when the session transcript file cannot be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read transcript {sanitize_path_for_error(path)}: {reason}")


class PromptLoadError(SessionReflectError):
    """Raised when the reflection prompt file cannot be loaded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load prompt {sanitize_path_for_error(path)}: {reason}")


class ConfigurationError(SessionReflectError):
    """Raised when configuration is invalid."""

    pass
