"""Domain types and policy constants for the session-reflect hook.

``HookPayload`` is the permissive decode of the stdin JSON; ``HookEvent``
is the tagged view the rest of the pipeline works with.  Transcript
analysis and decisions use plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Policy constants
# ---------------------------------------------------------------------------

USER_MSG_THRESHOLD: int = 4
"""Minimum human messages for a session to count as substantial."""

TOOL_TURN_THRESHOLD: int = 10
"""Minimum assistant turns with at least one tool call."""

MEMORY_PATH_MARKERS: tuple[str, ...] = ("Memory/Learnings/", "Memory/Decisions/")
"""Substrings of ``file_path`` that mark a memory write."""

FILE_MUTATING_TOOLS: frozenset[str] = frozenset({"Edit", "Write"})
"""Tools whose ``file_path`` input is checked against the memory markers."""

FALLBACK_REASON: str = (
    "Substantial session with no learnings captured. "
    "Create a file in Memory/Learnings/ or Memory/Decisions/ before ending."
)

PRECOMPACT_PREFIX: str = "BEFORE COMPACTING — capture session learnings and decisions now. "


# ---------------------------------------------------------------------------
# Hook input
# ---------------------------------------------------------------------------


class HookPayload(BaseModel):
    """Union of the Claude Code ``Stop`` and ``PreCompact`` stdin shapes.

    Every field is optional.  Unknown fields are ignored, but a known field
    with the wrong JSON type fails validation.
    """

    model_config = ConfigDict(extra="ignore", strict=True, frozen=True)

    stop_hook_active: bool = False
    cwd: str = ""
    transcript_path: str = ""
    trigger: str | None = None  # PreCompact only: "manual" | "auto"


class EventKind(str, Enum):
    """Lifecycle event the hook was invoked for."""

    STOP = "Stop"
    PRE_COMPACT = "PreCompact"


@dataclass(frozen=True)
class HookEvent:
    """Classified hook input.

    ``trigger`` is only meaningful for ``PRE_COMPACT``; ``stop_hook_active``
    and ``transcript_path`` only for ``STOP``.
    """

    kind: EventKind
    cwd: str = ""
    transcript_path: str = ""
    stop_hook_active: bool = False
    trigger: str = ""

    @classmethod
    def from_payload(cls, payload: HookPayload) -> HookEvent:
        # The trigger field's presence, not its value, marks PreCompact
        if payload.trigger is not None:
            return cls(kind=EventKind.PRE_COMPACT, cwd=payload.cwd, trigger=payload.trigger)
        return cls(
            kind=EventKind.STOP,
            cwd=payload.cwd,
            transcript_path=payload.transcript_path,
            stop_hook_active=payload.stop_hook_active,
        )

    @property
    def is_pre_compact(self) -> bool:
        return self.kind is EventKind.PRE_COMPACT


# ---------------------------------------------------------------------------
# Transcript analysis
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineResult:
    """Outcome of parsing one transcript line.

    Exactly one of ``value`` / ``skip_reason`` is meaningful: a line either
    parsed to a JSON value or was skipped for ``skip_reason``.
    """

    value: Any = None
    skip_reason: str = ""

    @property
    def parsed(self) -> bool:
        return not self.skip_reason


@dataclass
class AnalysisResult:
    """Aggregate signals over a whole transcript.

    Counters only ever increase and ``memory_write_observed`` is never
    reset once set; use the ``record_*`` methods rather than assigning.
    """

    user_message_count: int = 0
    tool_using_turn_count: int = 0
    memory_write_observed: bool = False

    def record_user_message(self) -> None:
        self.user_message_count += 1

    def record_tool_using_turn(self) -> None:
        self.tool_using_turn_count += 1

    def record_memory_write(self) -> None:
        self.memory_write_observed = True

    @property
    def is_substantial(self) -> bool:
        """Both thresholds met: sustained, tool-assisted, multi-turn work."""
        return (
            self.user_message_count >= USER_MSG_THRESHOLD
            and self.tool_using_turn_count >= TOOL_TURN_THRESHOLD
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "user_message_count": self.user_message_count,
            "tool_using_turn_count": self.tool_using_turn_count,
            "memory_write_observed": self.memory_write_observed,
        }


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoOp:
    """A guard fired (or input was unusable): the hook has no opinion."""

    reason: str = ""

    def to_output(self) -> dict[str, str] | None:
        return None


@dataclass(frozen=True)
class Allow:
    """Stop may proceed."""

    def to_output(self) -> dict[str, str] | None:
        return None


@dataclass(frozen=True)
class Block:
    """Stop is refused until learnings are recorded."""

    reason: str

    def to_output(self) -> dict[str, str] | None:
        return {"decision": "block", "reason": self.reason}


@dataclass(frozen=True)
class InjectContext:
    """Reflection context injected ahead of compaction."""

    additional_context: str

    def to_output(self) -> dict[str, str] | None:
        return {"additionalContext": self.additional_context}


Decision = NoOp | Allow | Block | InjectContext
