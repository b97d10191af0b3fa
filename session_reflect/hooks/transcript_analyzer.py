"""Scan a Claude Code JSONL transcript for session-size and memory signals.

Every line is parsed independently into a ``LineResult``; lines that are
not JSON are skipped and never abort the scan.

Counted signals:

* ``type == "human"`` lines -> user messages
* ``type == "assistant"`` lines whose ``message.content`` holds at least
  one ``tool_use`` item -> tool-using turns (one per line, however many
  tool calls it carries)
* ``Edit`` / ``Write`` tool calls whose ``input.file_path`` contains a
  memory path marker -> memory write observed
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from session_reflect.core.errors import TranscriptReadError
from session_reflect.hooks.models import (
    FILE_MUTATING_TOOLS,
    MEMORY_PATH_MARKERS,
    AnalysisResult,
    LineResult,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def read_transcript(transcript_path: str) -> str:
    """Read the whole transcript as UTF-8 text.

    Raises:
        TranscriptReadError: If the path is empty or the file cannot be
            read or decoded.
    """
    if not transcript_path:
        raise TranscriptReadError(transcript_path, "no transcript path")
    try:
        return Path(transcript_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TranscriptReadError(transcript_path, type(e).__name__) from e


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_line(line: str) -> LineResult:
    """Parse one transcript line.

    ``NaN`` and ``Infinity`` are not JSON, so lines using them are skipped.
    """
    try:
        return LineResult(value=json.loads(line, parse_constant=_reject_constant))
    except (ValueError, RecursionError):
        return LineResult(skip_reason="invalid_json")


def _str_field(obj: object, key: str) -> str | None:
    """``obj[key]`` if *obj* is a dict and the value is a string."""
    if not isinstance(obj, dict):
        return None
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _is_memory_path(file_path: str) -> bool:
    return any(marker in file_path for marker in MEMORY_PATH_MARKERS)


def _scan_assistant_content(content: list[object], result: AnalysisResult) -> None:
    """Scan one assistant turn's content items into *result*."""
    turn_has_tool_use = False

    for item in content:
        if not isinstance(item, dict) or _str_field(item, "type") != "tool_use":
            continue

        turn_has_tool_use = True

        tool_name = _str_field(item, "name") or ""
        if tool_name not in FILE_MUTATING_TOOLS:
            continue

        file_path = _str_field(item.get("input"), "file_path") or ""
        if _is_memory_path(file_path):
            result.record_memory_write()

    if turn_has_tool_use:
        result.record_tool_using_turn()


def _apply_entry(entry: object, result: AnalysisResult) -> None:
    if not isinstance(entry, dict):
        return

    entry_type = _str_field(entry, "type") or ""

    if entry_type == "human":
        result.record_user_message()
        return

    if entry_type != "assistant":
        return

    message = entry.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, list):
        return

    _scan_assistant_content(content, result)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_lines(lines: Iterable[str]) -> AnalysisResult:
    """Accumulate an ``AnalysisResult`` over *lines* in order."""
    result = AnalysisResult()
    skipped = 0

    for line in lines:
        if not line.strip():
            continue
        parsed = parse_line(line)
        if not parsed.parsed:
            skipped += 1
            continue
        _apply_entry(parsed.value, result)

    if skipped:
        logger.debug("Skipped %d unparseable transcript lines", skipped)
    return result


def analyze_transcript(transcript: str) -> AnalysisResult:
    """Analyze newline-delimited transcript text.

    Args:
        transcript: Full JSONL transcript contents.

    Returns:
        Counts of user messages and tool-using turns, and whether a
        memory write was seen.
    """
    # Split on "\n" only: U+2028 and friends may appear raw inside JSON strings
    return analyze_lines(transcript.split("\n"))


def analyze_transcript_file(transcript_path: str) -> AnalysisResult:
    """``read_transcript`` followed by ``analyze_transcript``.

    Raises:
        TranscriptReadError: If the file cannot be read.
    """
    return analyze_transcript(read_transcript(transcript_path))
