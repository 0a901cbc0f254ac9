"""Carry out a resolved visitor action."""

import inspect
from collections.abc import Callable
from typing import Any

import structlog

from api.v1.schemas.public_page import ActionResponse
from domain.payment_types import DEFAULT_INSTRUCTIONS
from domain.resolution import Action, ActionKind, DisplayAndCopy, Navigate

logger = structlog.get_logger()


def action_from_response(response: ActionResponse) -> Action:
    """Rebuild the domain action from its API representation."""
    if response.kind == ActionKind.NAVIGATE and response.uri:
        return Navigate(uri=response.uri)
    return DisplayAndCopy(
        text=response.text or "",
        instructions=response.instructions or DEFAULT_INSTRUCTIONS,
    )


async def trigger(
    action: Action,
    *,
    open_uri: Callable[[str], Any],
    write_clipboard: Callable[[str], Any],
) -> bool:
    """Open the link or copy the handle.

    Both callbacks may be plain functions or coroutine functions. Returns
    False when the clipboard write fails; that failure is logged and never
    raised, so the handle stays on screen for manual copying.
    """
    if isinstance(action, Navigate):
        result = open_uri(action.uri)
        if inspect.isawaitable(result):
            await result
        return True

    try:
        result = write_clipboard(action.text)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.warning("clipboard_write_failed", error=str(e), error_type=type(e).__name__)
        return False
    return True
