"""
Invite Warden - Anti-Spam Service
=================================

Per-user message flood detection.

DESIGN:
    Each user has a sliding window of message timestamps. Every message
    appends "now" and drops anything older than the window. When the
    window reaches the message limit the triggering message is deleted and
    the window is emptied, so a burst of exactly N messages causes one
    delete and message N+1 starts a fresh count.

    Updates for the same user are serialised with a per-user lock; the
    delete is awaited while the lock is held.

    Exempt callers (bots, DMs, owners) are filtered out by the message
    event cog before this service is reached.
"""

import time
from typing import Callable

import discord

from warden.core.config import Config
from warden.core.constants import LOG_TRUNCATE_CONTENT
from warden.core.logger import logger
from warden.state.spam_windows import SpamWindowStore
from warden.utils.async_utils import best_effort_delete
from warden.utils.keyed_lock import KeyedLock


class AntiSpamService:
    """
    Sliding-window flood detection with delete-and-reset on breach.

    Args:
        config: Thresholds (spam_message_count, spam_time_window_ms).
        windows: Store of per-user windows.
        clock: Monotonic clock in seconds, injectable for tests.
    """

    def __init__(
        self,
        config: Config,
        windows: SpamWindowStore,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.windows = windows
        self._clock = clock
        self._locks = KeyedLock()

        logger.tree("Anti-Spam Service Loaded", [
            ("Flood Limit", f"{config.spam_message_count} msgs / {config.spam_time_window_ms}ms"),
            ("Action", "Delete + reset window"),
        ], emoji="🛡️")

    async def check_message(self, message: discord.Message) -> bool:
        """
        Record a message and delete it if it trips the flood limit.

        Returns:
            True if the message tripped the limit (and a delete was attempted).
        """
        user_id = message.author.id

        async with self._locks.hold(user_id):
            window = self.windows.get(user_id)
            count = window.record(self._clock(), self.config.spam_time_window)

            if count < self.config.spam_message_count:
                return False

            await best_effort_delete(message, "Anti-Spam Delete")

            content = message.content or ""
            logger.tree("Anti-Spam: Message Deleted", [
                ("User", f"{message.author} ({user_id})"),
                ("Messages", f"{count} in {self.config.spam_time_window:g}s"),
                ("Content", content[:LOG_TRUNCATE_CONTENT] or "(empty)"),
            ], emoji="💨")

            window.reset()
            return True


__all__ = ["AntiSpamService"]
