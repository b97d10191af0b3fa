"""Load the reflection prompt from the vault's "Session Reflect" pattern note.

The note is authored for humans: optional YAML frontmatter, a ``# Title``
line, then instructional prose.  Only the prose is injected, so the
frontmatter block and the first H1 are stripped.
"""

from __future__ import annotations

import logging
from pathlib import Path

from session_reflect.config import DEFAULT_PROMPT_PATH
from session_reflect.core.errors import PromptLoadError

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"
H1_MARKER = "# "


def _split_lines(content: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line.

    Unicode separators such as U+2028 or form feed stay inside their line.
    A final ``\\n`` does not start an extra empty line.
    """
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def strip_frontmatter_and_h1(content: str) -> str:
    """Remove leading YAML frontmatter and the first H1 line.

    Frontmatter is only recognised when the very first line is ``---``;
    it runs to the next ``---`` line (both delimiters dropped) or, if never
    closed, to the end of the document.  After that, the first line
    starting with ``# `` is dropped wherever it appears.  Everything else
    is kept in order and rejoined with ``\\n``.
    """
    lines = _split_lines(content)
    if not lines:
        return ""

    result: list[str] = []
    in_frontmatter = False
    h1_removed = False

    first, rest = lines[0], lines[1:]
    if first.strip() == FRONTMATTER_DELIMITER:
        in_frontmatter = True
    elif first.startswith(H1_MARKER):
        h1_removed = True
    else:
        result.append(first)

    for line in rest:
        if in_frontmatter:
            if line.strip() == FRONTMATTER_DELIMITER:
                in_frontmatter = False
            continue

        if not h1_removed and line.startswith(H1_MARKER):
            h1_removed = True
            continue

        result.append(line)

    return "\n".join(result)


def read_prompt_file(path: Path) -> str:
    """Read *path* as UTF-8.

    Raises:
        PromptLoadError: If the file is missing, unreadable, not a regular
            file, or not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PromptLoadError(path, type(e).__name__) from e


def load_reflection_prompt(cwd: str, relative_path: str = DEFAULT_PROMPT_PATH) -> str | None:
    """Load and sanitize the reflection prompt for a session rooted at *cwd*.

    Args:
        cwd: Session working directory.
        relative_path: Prompt note location relative to *cwd*.

    Returns:
        The trimmed prompt text, or ``None`` if the note cannot be read or
        is empty once frontmatter and title are removed.
    """
    try:
        content = read_prompt_file(Path(cwd) / relative_path)
    except PromptLoadError as e:
        logger.debug("No reflection prompt: %s", e)
        return None

    stripped = strip_frontmatter_and_h1(content).strip()
    if not stripped:
        logger.debug("Reflection prompt is empty after stripping")
        return None
    return stripped
