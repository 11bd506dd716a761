"""
Invite Warden - Async Utilities
===============================

Helpers for best-effort awaits and background tasks that log their failures
instead of letting them disappear.

Usage:
    from warden.utils.async_utils import safe_async_operation, create_safe_task

    deleted = await safe_async_operation("Delete Message", message.delete(), default=False)

    create_safe_task(self._loop(), "Heartbeat Loop")
"""

import asyncio
from typing import Any, Coroutine

from warden.core.logger import logger


_SENTINEL = object()


async def safe_async_operation(
    name: str,
    coro: Coroutine[Any, Any, Any],
    default: Any = None,
    log_level: str = "warning",
) -> Any:
    """
    Run a single async operation, logging and swallowing any failure.

    Args:
        name: Name of the operation for logging.
        coro: The coroutine to run.
        default: Value to return if operation fails.
        log_level: Log level for errors ("debug", "warning", "error").

    Returns:
        Result of the coroutine, or default if it fails.
    """
    try:
        return await coro
    except Exception as e:
        error_details = [
            ("Operation", name),
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ]

        if log_level == "debug":
            logger.debug(f"Async Operation Failed: {name} ({type(e).__name__}: {str(e)[:100]})")
        elif log_level == "error":
            logger.error("Async Operation Failed", error_details)
        else:
            logger.warning("Async Operation Failed", error_details)

        return default


async def best_effort_delete(message: Any, name: str = "Delete Message") -> bool:
    """
    Delete a message, swallowing failures.

    Returns:
        True if the delete call succeeded.
    """
    result = await safe_async_operation(name, message.delete(), default=_SENTINEL, log_level="debug")
    return result is not _SENTINEL


# =============================================================================
# Safe Background Tasks
# =============================================================================

def create_safe_task(
    coro: Coroutine[Any, Any, Any],
    name: str = "Background Task",
) -> asyncio.Task:
    """
    Create a background task with automatic error logging.

    Args:
        coro: The coroutine to run as a background task.
        name: Name for logging purposes.

    Returns:
        The created asyncio.Task.
    """
    async def wrapped():
        try:
            await coro
        except asyncio.CancelledError:
            pass  # Shutdown
        except Exception as e:
            logger.error("Background Task Failed", [
                ("Task", name),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:200]),
            ])

    return asyncio.create_task(wrapped(), name=name)


__all__ = [
    "safe_async_operation",
    "best_effort_delete",
    "create_safe_task",
]
