"""Unit tests for session_reflect.hooks.policy.

All collaborators are injected as mock callables.

Tests cover:
1. PreCompact — always injects, never analyzes the transcript
2. Stop — threshold rule, memory-write rule, block with prompt or fallback
3. Error propagation — TranscriptReadError reaches the caller
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from session_reflect.core.errors import TranscriptReadError
from session_reflect.hooks.models import (
    FALLBACK_REASON,
    PRECOMPACT_PREFIX,
    Allow,
    AnalysisResult,
    Block,
    EventKind,
    HookEvent,
    InjectContext,
)
from session_reflect.hooks.policy import decide, decide_stop

STOP = HookEvent(kind=EventKind.STOP, cwd="/d/x", transcript_path="/t.jsonl")
PRE_COMPACT = HookEvent(kind=EventKind.PRE_COMPACT, cwd="/d/x", trigger="auto")


def _analysis(users: int, turns: int, memory: bool = False) -> AnalysisResult:
    return AnalysisResult(
        user_message_count=users,
        tool_using_turn_count=turns,
        memory_write_observed=memory,
    )


# =============================================================================
# PreCompact path
# =============================================================================


@pytest.mark.unit
class TestPreCompact:
    def test_injects_prompt(self) -> None:
        analyze = MagicMock()
        load_prompt = MagicMock(return_value="Write it down.")
        decision = decide(PRE_COMPACT, analyze_fn=analyze, load_prompt_fn=load_prompt)
        assert decision == InjectContext(additional_context=PRECOMPACT_PREFIX + "Write it down.")
        load_prompt.assert_called_once_with("/d/x")

    def test_never_analyzes_transcript(self) -> None:
        analyze = MagicMock()
        decide(PRE_COMPACT, analyze_fn=analyze, load_prompt_fn=lambda cwd: None)
        analyze.assert_not_called()

    def test_fallback_when_no_prompt(self) -> None:
        decision = decide(PRE_COMPACT, analyze_fn=MagicMock(), load_prompt_fn=lambda cwd: None)
        assert isinstance(decision, InjectContext)
        assert decision.additional_context == PRECOMPACT_PREFIX + FALLBACK_REASON

    def test_plain_concatenation(self) -> None:
        decision = decide(PRE_COMPACT, analyze_fn=MagicMock(), load_prompt_fn=lambda cwd: "X")
        assert isinstance(decision, InjectContext)
        assert decision.additional_context.endswith("now. X")


# =============================================================================
# Stop path
# =============================================================================


@pytest.mark.unit
class TestStop:
    @pytest.mark.parametrize(("users", "turns"), [(2, 3), (3, 50), (50, 9), (0, 0)])
    def test_below_either_threshold_allows(self, users: int, turns: int) -> None:
        load_prompt = MagicMock(return_value="prompt")
        decision = decide(
            STOP,
            analyze_fn=lambda path: _analysis(users, turns),
            load_prompt_fn=load_prompt,
        )
        assert decision == Allow()
        load_prompt.assert_not_called()

    def test_memory_write_allows(self) -> None:
        decision = decide(
            STOP,
            analyze_fn=lambda path: _analysis(5, 12, memory=True),
            load_prompt_fn=MagicMock(return_value="prompt"),
        )
        assert decision == Allow()

    def test_substantial_without_memory_blocks_with_prompt(self) -> None:
        analyze = MagicMock(return_value=_analysis(4, 10))
        decision = decide(
            STOP,
            analyze_fn=analyze,
            load_prompt_fn=lambda cwd: "Reflect now.",
        )
        assert decision == Block(reason="Reflect now.")
        analyze.assert_called_once_with("/t.jsonl")

    def test_block_falls_back(self) -> None:
        decision = decide(
            STOP,
            analyze_fn=lambda path: _analysis(5, 12),
            load_prompt_fn=lambda cwd: None,
        )
        assert decision == Block(reason=FALLBACK_REASON)

    def test_transcript_error_propagates(self) -> None:
        def _fail(path: str) -> AnalysisResult:
            raise TranscriptReadError(path, "FileNotFoundError")

        with pytest.raises(TranscriptReadError):
            decide(STOP, analyze_fn=_fail, load_prompt_fn=lambda cwd: None)


@pytest.mark.unit
class TestDecideStop:
    def test_reason_only_built_when_blocking(self) -> None:
        reason_fn = MagicMock(return_value="r")
        assert decide_stop(_analysis(1, 1), reason_fn) == Allow()
        assert decide_stop(_analysis(9, 99, memory=True), reason_fn) == Allow()
        reason_fn.assert_not_called()
        assert decide_stop(_analysis(9, 99), reason_fn) == Block(reason="r")
