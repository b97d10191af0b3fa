"""Setup helpers for wiring session-reflect into Claude Code."""
