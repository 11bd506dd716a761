"""
Invite Warden - Heartbeat Service
=================================

Posts a periodic "still alive" message to the log channel of every guild.

DESIGN:
    A single background loop sleeps for the interval, then walks the
    guilds. A failure in one guild is logged and the walk continues; the
    loop itself only stops on shutdown.
"""

import asyncio
from typing import Callable, Iterable, Optional

import discord

from warden.core.config import Config
from warden.core.constants import HEARTBEAT_MESSAGE, LOG_TRUNCATE_SHORT
from warden.core.logger import logger
from warden.utils.async_utils import create_safe_task


class HeartbeatService:
    """
    Liveness signal to `#<log_channel_name>` in each guild.

    Args:
        config: Interval and channel name.
        get_guilds: Returns the guilds to signal on each tick.
    """

    def __init__(self, config: Config, get_guilds: Callable[[], Iterable[discord.Guild]]) -> None:
        self.config = config
        self._get_guilds = get_guilds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = create_safe_task(self._loop(), "Heartbeat Loop")
        logger.tree("Heartbeat Started", [
            ("Channel", f"#{self.config.log_channel_name}"),
            ("Interval", f"{self.config.heartbeat_interval:g}s"),
        ], emoji="❤️")

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.heartbeat_interval)
            try:
                await self.beat()
            except Exception as e:
                logger.warning("Heartbeat Tick Failed", [
                    ("Error Type", type(e).__name__),
                    ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
                ])

    async def beat(self) -> int:
        """
        Send one heartbeat to every guild that has the log channel.

        Returns:
            Number of guilds the message reached.
        """
        sent = 0
        for guild in list(self._get_guilds()):
            channel = discord.utils.get(guild.text_channels, name=self.config.log_channel_name)
            if channel is None:
                continue
            try:
                await channel.send(HEARTBEAT_MESSAGE)
                sent += 1
                logger.info(f"❤️ Heartbeat sent to {guild.name}/#{self.config.log_channel_name}")
            except Exception as e:
                logger.warning("Heartbeat Failed", [
                    ("Guild", f"{guild.name} ({guild.id})"),
                    ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
                ])
        return sent


__all__ = ["HeartbeatService"]
