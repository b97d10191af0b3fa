"""Hook pipeline for session reflection.

``event_classifier`` decodes the Stop / PreCompact payload and applies the
no-op guards, ``transcript_analyzer`` extracts the session signals,
``prompt_loader`` reads the reflection note, and ``policy`` combines them.
``session_reflect.main`` is the process entrypoint wired into Claude Code.
"""

from session_reflect.hooks.models import (
    FALLBACK_REASON,
    PRECOMPACT_PREFIX,
    TOOL_TURN_THRESHOLD,
    USER_MSG_THRESHOLD,
    Allow,
    AnalysisResult,
    Block,
    Decision,
    EventKind,
    HookEvent,
    HookPayload,
    InjectContext,
    NoOp,
)

__all__ = [
    "FALLBACK_REASON",
    "PRECOMPACT_PREFIX",
    "TOOL_TURN_THRESHOLD",
    "USER_MSG_THRESHOLD",
    "Allow",
    "AnalysisResult",
    "Block",
    "Decision",
    "EventKind",
    "HookEvent",
    "HookPayload",
    "InjectContext",
    "NoOp",
]
