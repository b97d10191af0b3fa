"""Decode the hook payload and apply the no-op guards.

``classify`` returns ``None`` whenever the hook must stay silent: the
payload is unusable, the Stop hook is re-entering itself, or the session
lives outside the scope root.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from session_reflect.core.errors import HookInputError
from session_reflect.hooks.hook_helpers import is_in_scope
from session_reflect.hooks.models import EventKind, HookEvent, HookPayload

logger = logging.getLogger(__name__)


def decode_payload(raw: str) -> HookPayload:
    """Decode *raw* stdin text into a ``HookPayload``.

    Raises:
        HookInputError: If *raw* is blank, not JSON, not an object, or has
            a known field of the wrong type.
    """
    if not raw or not raw.strip():
        raise HookInputError("empty hook payload")
    try:
        return HookPayload.model_validate_json(raw)
    except ValidationError as e:
        raise HookInputError(f"invalid hook payload ({e.error_count()} errors)") from e


def parse_payload(raw: str) -> HookPayload | None:
    """Fail-open variant of ``decode_payload``: ``None`` instead of raising."""
    try:
        return decode_payload(raw)
    except HookInputError as e:
        logger.debug("Ignoring hook input: %s", e)
        return None


def classify(payload: HookPayload, scope_root: str) -> HookEvent | None:
    """Turn *payload* into a ``HookEvent`` unless a guard suppresses it.

    Args:
        payload: Decoded stdin payload.
        scope_root: ``<home>/<subpath>`` prefix the session cwd must have.

    Returns:
        The event, or ``None`` for a no-op.
    """
    event = HookEvent.from_payload(payload)

    # Our own block re-invokes Stop with stop_hook_active set
    if event.kind is EventKind.STOP and event.stop_hook_active:
        logger.debug("Skipping: stop_hook_active")
        return None

    if not is_in_scope(event.cwd, scope_root):
        logger.debug("Skipping: cwd outside %s", scope_root)
        return None

    return event


def classify_raw(raw: str, scope_root: str) -> HookEvent | None:
    """``parse_payload`` followed by ``classify``."""
    payload = parse_payload(raw)
    if payload is None:
        return None
    return classify(payload, scope_root)
