"""Entry point for the session-reflect hook and CLI commands."""

from __future__ import annotations

import argparse
import json
import sys
from typing import NoReturn


def run_hook() -> None:
    """Run the Stop / PreCompact hook against stdin."""
    from session_reflect.hooks.session_reflect import main as hook_main

    hook_main()


def run_version() -> None:
    """Print version information."""
    from session_reflect import __version__

    print(f"session-reflect {__version__}")


def run_analyze(args: argparse.Namespace) -> int:
    """Analyze a transcript and show what the Stop hook would decide.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    from session_reflect.core.errors import TranscriptReadError
    from session_reflect.hooks.models import (
        FALLBACK_REASON,
        TOOL_TURN_THRESHOLD,
        USER_MSG_THRESHOLD,
        Block,
    )
    from session_reflect.hooks.policy import decide_stop
    from session_reflect.hooks.transcript_analyzer import analyze_transcript_file

    try:
        analysis = analyze_transcript_file(args.transcript)
    except TranscriptReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    decision = decide_stop(analysis, lambda: FALLBACK_REASON)
    report = {
        **analysis.to_dict(),
        "thresholds": {
            "user_messages": USER_MSG_THRESHOLD,
            "tool_using_turns": TOOL_TURN_THRESHOLD,
        },
        "substantial": analysis.is_substantial,
        "would_block": isinstance(decision, Block),
    }
    print(json.dumps(report, indent=2))
    return 0


def run_prompt(args: argparse.Namespace) -> int:
    """Print the reflection text the hook would inject for a working directory.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for invalid settings). A missing note
        prints the fallback sentence.
    """
    from session_reflect.config import get_settings
    from session_reflect.core.errors import ConfigurationError
    from session_reflect.hooks.models import FALLBACK_REASON
    from session_reflect.hooks.prompt_loader import load_reflection_prompt

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    prompt = load_reflection_prompt(args.cwd, relative_path=settings.prompt_path)
    if prompt is None:
        print("(no prompt note found, using fallback)", file=sys.stderr)
        prompt = FALLBACK_REASON
    print(prompt)
    return 0


def run_config() -> int:
    """Print the active settings."""
    from session_reflect.config import get_settings, settings_summary
    from session_reflect.core.errors import ConfigurationError

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(settings_summary(settings), indent=2))
    return 0


def run_setup_hooks(args: argparse.Namespace) -> int:
    """Generate the Claude Code hook configuration.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    from session_reflect.tools.setup_hooks import generate_hook_config

    try:
        config = generate_hook_config(
            mode=args.mode,
            python_path=args.python_path or "",
            timeout=args.timeout,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(config, indent=2))
        return 0

    print("Session Reflect - Hook Configuration")
    print(f"Command: {config['command']}")
    print()
    print("Hooks config:")
    print(json.dumps({"hooks": config["hooks"]}, indent=2))
    print()
    print(config["instructions"])
    return 0


def main() -> NoReturn:
    """Main entry point with subcommand support."""
    # Fast-path: Claude Code runs the hook with no arguments (or "hook")
    if len(sys.argv) < 2 or sys.argv[1] == "hook":
        try:
            run_hook()
        except Exception:
            pass  # Fail-open
        sys.exit(0)

    parser = argparse.ArgumentParser(
        prog="session-reflect",
        description="Stop / PreCompact hook that asks Claude to record session learnings",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
    )

    subparsers.add_parser(
        "hook",
        help="Run the hook against stdin (default if no command given)",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Show transcript signals and whether Stop would be blocked",
    )
    analyze_parser.add_argument("transcript", help="Path to a JSONL session transcript")

    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Show the reflection prompt for a working directory",
    )
    prompt_parser.add_argument(
        "--cwd",
        default=".",
        help="Session working directory (default: current directory)",
    )

    subparsers.add_parser(
        "config",
        help="Show the active settings",
    )

    setup_hooks_parser = subparsers.add_parser(
        "setup-hooks",
        help="Generate the Claude Code hooks config",
    )
    setup_hooks_parser.add_argument(
        "--mode",
        default="prod",
        choices=["prod", "dev"],
        help="prod: installed console script; dev: python -m session_reflect",
    )
    setup_hooks_parser.add_argument(
        "--python-path",
        default="",
        help="Interpreter for dev mode (default: current interpreter)",
    )
    setup_hooks_parser.add_argument(
        "--timeout",
        type=int,
        default=10,
        help="Hook timeout in seconds (default: 10)",
    )
    setup_hooks_parser.add_argument(
        "--json",
        action="store_true",
        help="Output raw JSON",
    )

    args = parser.parse_args()

    if args.version:
        run_version()
        sys.exit(0)

    if args.command == "analyze":
        sys.exit(run_analyze(args))
    elif args.command == "prompt":
        sys.exit(run_prompt(args))
    elif args.command == "config":
        sys.exit(run_config())
    elif args.command == "setup-hooks":
        sys.exit(run_setup_hooks(args))
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
