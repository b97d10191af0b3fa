"""Pytest fixtures for session-reflect tests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from session_reflect.config import reset_settings

PROMPT_RELATIVE_PATH = Path("Vaults/Personal/Orchestration/Patterns/Session Reflect.md")

# ---------------------------------------------------------------------------
# Transcript line builders
# ---------------------------------------------------------------------------


def _human_entry(text: str = "please continue") -> dict[str, object]:
    return {"type": "human", "message": {"role": "user", "content": text}}


def _tool_turn_entry(name: str = "Bash", file_path: str | None = None) -> dict[str, object]:
    tool_input: dict[str, object] = {"command": "ls"}
    if file_path is not None:
        tool_input = {"file_path": file_path}
    return {
        "type": "assistant",
        "message": {
            "role": "assistant",
            "content": [
                {"type": "text", "text": "Running a tool."},
                {"type": "tool_use", "id": "toolu_1", "name": name, "input": tool_input},
            ],
        },
    }


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop SESSION_REFLECT_* variables and the settings singleton around each test."""
    for key in list(os.environ):
        if key.startswith("SESSION_REFLECT_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Undo configure_logging() calls made by the hook entrypoint."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fake $HOME containing the Data scope root."""
    home_dir = tmp_path / "home"
    (home_dir / "Data").mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def session_cwd(home: Path) -> Path:
    """A session working directory inside the scope root."""
    cwd = home / "Data" / "x"
    cwd.mkdir()
    return cwd


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


@pytest.fixture
def write_transcript(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSONL transcript with the requested number of turns.

    ``memory_path`` adds one ``Write`` tool call to that path as the last
    tool-using turn (counted within ``tool_turns``).
    """

    def _write(
        human: int = 0,
        tool_turns: int = 0,
        memory_path: str | None = None,
        extra_lines: tuple[str, ...] = (),
        name: str = "t.jsonl",
    ) -> Path:
        entries: list[dict[str, object]] = [_human_entry() for _ in range(human)]
        plain_turns = tool_turns - 1 if memory_path is not None else tool_turns
        entries.extend(_tool_turn_entry() for _ in range(plain_turns))
        if memory_path is not None:
            entries.append(_tool_turn_entry("Write", memory_path))

        lines = [json.dumps(entry) for entry in entries]
        lines.extend(extra_lines)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_prompt() -> Callable[[Path, str], Path]:
    """Write the reflection prompt note under a session cwd."""

    def _write(cwd: Path, content: str) -> Path:
        path = cwd / PROMPT_RELATIVE_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
