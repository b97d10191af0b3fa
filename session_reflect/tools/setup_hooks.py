"""Generate the Claude Code hook configuration for session-reflect.

The same command serves both events: the hook tells ``Stop`` and
``PreCompact`` apart from the payload itself.
"""

from __future__ import annotations

import shlex
import sys
from typing import Any

HOOK_EVENTS: tuple[str, ...] = ("Stop", "PreCompact")

DEFAULT_TIMEOUT: int = 10

_PROD_COMMAND = "session-reflect hook"


def _resolve_python() -> str:
    """Resolve the current Python interpreter path."""
    return sys.executable


def build_command(mode: str = "prod", python: str = "") -> str:
    """Return the shell command Claude Code should run.

    Args:
        mode: ``"prod"`` for the installed console script, ``"dev"`` for
            ``python -m session_reflect`` with the current interpreter.
        python: Interpreter path for ``"dev"`` mode.
    """
    if mode == "dev":
        return f"{shlex.quote(python or _resolve_python())} -m session_reflect hook"
    if mode != "prod":
        raise ValueError(f"Unknown mode: {mode!r} (expected 'prod' or 'dev')")
    return _PROD_COMMAND


def build_hooks(command: str, timeout: int = DEFAULT_TIMEOUT) -> dict[str, list[dict[str, Any]]]:
    """Build the ``hooks`` block registering *command* for each event."""
    return {
        event: [
            {
                "hooks": [
                    {
                        "type": "command",
                        "command": command,
                        "timeout": timeout,
                    }
                ],
            }
        ]
        for event in HOOK_EVENTS
    }


def generate_hook_config(
    mode: str = "prod",
    python_path: str = "",
    timeout: int = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """Assemble the full setup response.

    Returns:
        Dict with ``command``, ``hooks`` and ``instructions`` keys.

    Raises:
        ValueError: If *mode* is unknown or *timeout* is not positive.
    """
    if timeout <= 0:
        raise ValueError("timeout must be a positive number of seconds")

    command = build_command(mode=mode, python=python_path)
    return {
        "command": command,
        "hooks": build_hooks(command, timeout=timeout),
        "instructions": (
            "Merge the 'hooks' block into ~/.claude/settings.json (or the "
            "project's .claude/settings.json). The hook only acts on sessions "
            "whose working directory is under the scope root "
            "($HOME/Data unless SESSION_REFLECT_SCOPE_SUBPATH is set)."
        ),
    }
