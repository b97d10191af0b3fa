"""Session Reflect - Claude Code hook that asks for learnings before a session ends."""

__version__ = "0.1.0"

from session_reflect.config import Settings, get_settings
from session_reflect.core import (
    ConfigurationError,
    HookInputError,
    PromptLoadError,
    SessionReflectError,
    TranscriptReadError,
)
from session_reflect.hooks import (
    Allow,
    AnalysisResult,
    Block,
    Decision,
    EventKind,
    HookEvent,
    InjectContext,
    NoOp,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "ConfigurationError",
    "HookInputError",
    "PromptLoadError",
    "SessionReflectError",
    "TranscriptReadError",
    # Models
    "Allow",
    "AnalysisResult",
    "Block",
    "Decision",
    "EventKind",
    "HookEvent",
    "InjectContext",
    "NoOp",
]
