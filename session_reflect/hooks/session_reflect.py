"""Stop / PreCompact hook entrypoint for session reflection.

Reads the hook payload from stdin and answers on stdout:

* PreCompact: ``{"additionalContext": "<prefix><reflection prompt>"}``
* Stop, substantial session with no memory write:
  ``{"decision": "block", "reason": "<reflection prompt>"}``
* Anything else: no output ("no opinion")

**Loop guard**: When ``stop_hook_active`` is ``True`` on a Stop event the
hook stays silent, so its own block cannot re-trigger itself.

**Fail-open**: All exceptions are caught; the script always exits 0.
Never exit 2 and never block a session whose input could not be
understood.

Exit codes:
    0: Always. Decision, skip, or silent failure.
"""

from __future__ import annotations

import functools
import logging

from session_reflect.config import Settings, get_settings
from session_reflect.core.errors import TranscriptReadError
from session_reflect.core.logging import configure_logging
from session_reflect.hooks.event_classifier import classify_raw
from session_reflect.hooks.hook_helpers import log_hook_error, read_stdin_text, write_json_line
from session_reflect.hooks.models import Decision, NoOp
from session_reflect.hooks.policy import decide
from session_reflect.hooks.prompt_loader import load_reflection_prompt
from session_reflect.hooks.transcript_analyzer import analyze_transcript_file

logger = logging.getLogger(__name__)

HOOK_NAME = "session-reflect"


def run_hook(raw: str, settings: Settings, home: str | None = None) -> Decision:
    """Run the full pipeline on raw stdin text.

    Args:
        raw: Hook payload as read from stdin.
        settings: Active settings.
        home: Home directory override; ``$HOME`` when ``None``.

    Returns:
        The decision.  Unusable input, a fired guard, or an unreadable
        transcript all give ``NoOp``.
    """
    event = classify_raw(raw, settings.scope_root(home))
    if event is None:
        return NoOp(reason="suppressed")

    load_prompt_fn = functools.partial(
        load_reflection_prompt, relative_path=settings.prompt_path
    )
    try:
        return decide(
            event,
            analyze_fn=analyze_transcript_file,
            load_prompt_fn=load_prompt_fn,
        )
    except TranscriptReadError as e:
        logger.debug("Skipping: %s", e)
        return NoOp(reason="transcript_unreadable")


def main() -> None:
    """Entrypoint. Fail-open: catches all exceptions, always exits 0."""
    settings: Settings | None = None
    try:
        settings = get_settings()
        configure_logging(level=settings.log_level, json_format=settings.log_json)

        decision = run_hook(read_stdin_text(), settings)
        logger.debug("Decision: %s", decision)

        output = decision.to_output()
        if output is not None:
            write_json_line(output)
    except Exception as e:
        logger.warning("%s failed open: %s", HOOK_NAME, e)
        log_hook_error(e, HOOK_NAME, settings.log_dir if settings else None)


if __name__ == "__main__":
    main()
