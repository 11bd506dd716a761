"""
Invite Warden - Error Handler
=============================

Error categorisation and the process-wide safety net.

Features:
- Error categorization (Discord, API, General)
- Recovery suggestions in logs
- Discord-specific context capture
- asyncio loop exception handler that logs and keeps the process alive
- Safe execution decorator
"""

import functools
import traceback
from typing import Any, Dict

import discord

from warden.core.logger import logger


class ErrorHandler:
    """Error handling with context and recovery hints."""

    ERROR_CATEGORIES = {
        'discord': (
            discord.Forbidden,
            discord.NotFound,
            discord.HTTPException,
        ),
        'api': (
            ConnectionError,
            TimeoutError,
            OSError,
        ),
    }

    SUGGESTIONS = {
        discord.Forbidden: "Check bot permissions in server settings",
        discord.NotFound: "Resource not found - check IDs and channels",
        discord.HTTPException: "Discord API issue - operation skipped",
        ConnectionError: "Network connection issue - check internet connection",
        TimeoutError: "Request timed out - operation skipped",
        OSError: "System resource issue - check ports and permissions",
    }

    @classmethod
    def categorize_error(cls, e: BaseException) -> str:
        for category, error_types in cls.ERROR_CATEGORIES.items():
            if isinstance(e, error_types):
                return category
        return 'general'

    @classmethod
    def get_recovery_suggestion(cls, e: BaseException) -> str:
        # Most specific class first (Forbidden before HTTPException)
        for klass in type(e).__mro__:
            if klass in cls.SUGGESTIONS:
                return cls.SUGGESTIONS[klass]
        return "Unexpected error - check logs for details"

    @staticmethod
    def get_context(e: BaseException, location: str, **kwargs: Any) -> Dict[str, Any]:
        """Collect error details plus Discord context when available."""
        context: Dict[str, Any] = {
            'location': location,
            'error_type': type(e).__name__,
            'error_message': str(e),
            'traceback': ''.join(traceback.format_exception(type(e), e, e.__traceback__)),
        }

        message = kwargs.get('message')
        if isinstance(message, discord.Message):
            context['discord_context'] = {
                'guild': message.guild.name if message.guild else 'DM',
                'author': str(message.author),
                'author_id': message.author.id,
            }

        return context

    @classmethod
    def handle(cls, e: BaseException, location: str, critical: bool = False, **context: Any) -> None:
        """
        Log an error with full context. Never raises.

        Args:
            e: The exception
            location: Where the error occurred
            critical: Whether the error ends the process
            **context: Additional context
        """
        category = cls.categorize_error(e)
        suggestion = cls.get_recovery_suggestion(e)
        full_context = cls.get_context(e, location, **context)

        details = [
            ("Location", location),
            ("Category", category.upper()),
            ("Type", full_context['error_type']),
            ("Error", full_context['error_message'][:200]),
            ("Recovery", suggestion),
        ]

        if critical:
            logger.critical("CRITICAL ERROR", details)
            logger.info(f"Traceback:\n{full_context['traceback']}")
        else:
            logger.error("Unhandled Error", details)
            logger.debug(f"Traceback:\n{full_context['traceback']}")

    @classmethod
    def asyncio_exception_handler(cls, loop: Any, context: Dict[str, Any]) -> None:
        """
        Loop-level handler for errors nothing else caught.

        DESIGN:
            Installed with loop.set_exception_handler(). Logs and returns,
            so the process keeps running (availability over crash-fast).
        """
        exception = context.get("exception")
        if exception is None:
            logger.error("Unhandled Async Error", [
                ("Message", str(context.get("message", "unknown"))[:200]),
            ])
            return
        cls.handle(exception, location="asyncio.loop")


def safe_execute(func):
    """
    Decorator for async handlers: any exception is logged and swallowed.

    Usage:
        @safe_execute
        async def on_member_join(self, member):
            ...
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            ErrorHandler.handle(e, location=f"{func.__module__}.{func.__qualname__}")
            return None

    return wrapper


__all__ = ["ErrorHandler", "safe_execute"]
