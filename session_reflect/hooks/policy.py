"""Decision policy: turn a classified event into the hook's answer.

Collaborators are **injected as callables** so the policy can be tested
without touching the filesystem:

* ``analyze_fn(transcript_path) -> AnalysisResult``, may raise
  ``TranscriptReadError``
* ``load_prompt_fn(cwd) -> str | None``

PreCompact never looks at the transcript: a session long enough to be
compacted is treated as substantial.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from session_reflect.hooks.models import (
    FALLBACK_REASON,
    PRECOMPACT_PREFIX,
    Allow,
    AnalysisResult,
    Block,
    Decision,
    HookEvent,
    InjectContext,
)

logger = logging.getLogger(__name__)

AnalyzeFn = Callable[[str], AnalysisResult]
LoadPromptFn = Callable[[str], str | None]


def _reason(event: HookEvent, load_prompt_fn: LoadPromptFn) -> str:
    return load_prompt_fn(event.cwd) or FALLBACK_REASON


def decide_stop(analysis: AnalysisResult, reason_fn: Callable[[], str]) -> Decision:
    """Apply the stop rules to *analysis*, in order.

    1. Either threshold unmet -> ``Allow``
    2. Memory write already made -> ``Allow``
    3. Otherwise -> ``Block`` with ``reason_fn()``
    """
    if not analysis.is_substantial:
        return Allow()

    if analysis.memory_write_observed:
        return Allow()

    return Block(reason=reason_fn())


def decide(
    event: HookEvent,
    *,
    analyze_fn: AnalyzeFn,
    load_prompt_fn: LoadPromptFn,
) -> Decision:
    """Decide how to answer *event*.

    Raises:
        TranscriptReadError: Propagated from *analyze_fn* on the Stop path.
    """
    if event.is_pre_compact:
        return InjectContext(additional_context=PRECOMPACT_PREFIX + _reason(event, load_prompt_fn))

    analysis = analyze_fn(event.transcript_path)
    logger.debug(
        "Transcript: %d user messages, %d tool-using turns, memory write=%s",
        analysis.user_message_count,
        analysis.tool_using_turn_count,
        analysis.memory_write_observed,
    )
    return decide_stop(analysis, lambda: _reason(event, load_prompt_fn))
