"""Shared utilities for the hook entrypoint.

stdin/stdout protocol helpers, the scope-root check and the optional
on-disk error log.  None of these functions raise.
"""

from __future__ import annotations

import json
import os
import sys
import time
from pathlib import Path
from typing import Any

_MAX_LOG_SIZE: int = 1_048_576  # 1MB before rotation

HOOK_ERROR_LOG: str = "hook-errors.log"


# ---------------------------------------------------------------------------
# stdin / stdout helpers
# ---------------------------------------------------------------------------


def read_stdin_text() -> str:
    """Read the raw hook payload from stdin, to end of stream.

    Returns:
        The payload text, or ``""`` on any read error.
    """
    try:
        return sys.stdin.read() or ""
    except Exception:
        return ""


def write_json_line(payload: dict[str, Any]) -> None:
    """Write *payload* as a single compact JSON line to stdout and flush."""
    try:
        sys.stdout.write(json.dumps(payload, ensure_ascii=False, separators=(",", ":")))
        sys.stdout.write("\n")
        sys.stdout.flush()
    except Exception:
        pass


# ---------------------------------------------------------------------------
# Scope restriction
# ---------------------------------------------------------------------------


def is_in_scope(cwd: str, scope_root: str) -> bool:
    """Plain string-prefix test of *cwd* against *scope_root*.

    No normalization: ``~/DataArchive`` is in scope of ``~/Data``, and
    symlinks or ``..`` segments are not resolved.
    """
    return cwd.startswith(scope_root)


# ---------------------------------------------------------------------------
# Error logging
# ---------------------------------------------------------------------------


def log_hook_error(exc: BaseException, hook_name: str, log_dir: str | Path | None) -> None:
    """Append an error entry to ``hook-errors.log`` in *log_dir*.

    Rotates the log file when it exceeds ``_MAX_LOG_SIZE`` (1MB).  Does
    nothing when *log_dir* is empty.  This function **must never raise**.

    Args:
        exc: The exception to log.
        hook_name: Name of the hook that failed.
        log_dir: Directory for the log file.
    """
    try:
        if not log_dir:
            return

        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, HOOK_ERROR_LOG)

        try:
            if os.path.exists(log_path) and os.path.getsize(log_path) > _MAX_LOG_SIZE:
                rotated = log_path + ".1"
                if os.path.exists(rotated):
                    os.remove(rotated)
                os.rename(log_path, rotated)
        except OSError:
            pass

        timestamp = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        line = f"[{timestamp}] {hook_name}: {type(exc).__name__}: {exc}\n"
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(line)
    except Exception:
        pass  # Logger must never raise
