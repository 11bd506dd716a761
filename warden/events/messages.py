"""
Invite Warden - Message Events
==============================

Routes guild messages through moderation.

DESIGN: Ordered pipeline, first action wins:
1. Skip bots, DMs and owners (owners are exempt from every policy)
2. Anti-spam window (delete + reset on flood)
3. Content filter (mass mention, blocked links)
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from warden.core.config import is_owner
from warden.core.logger import logger
from warden.utils.error_handler import safe_execute

if TYPE_CHECKING:
    from warden.bot import WardenBot


class MessageEvents(commands.Cog):
    """Message event handlers."""

    def __init__(self, bot: "WardenBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    @safe_execute
    async def on_message(self, message: discord.Message) -> None:
        # -----------------------------------------------------------------
        # Skip: bots, DMs, owners
        # -----------------------------------------------------------------
        if message.author.bot or message.guild is None:
            return

        if is_owner(message.author, self.bot.config):
            return

        # -----------------------------------------------------------------
        # Anti-Spam (early exit if the message was deleted)
        # -----------------------------------------------------------------
        if await self.bot.antispam.check_message(message):
            return

        # -----------------------------------------------------------------
        # Content Filter
        # -----------------------------------------------------------------
        await self.bot.content_filter.enforce(message)


async def setup(bot: "WardenBot") -> None:
    """Add the message events cog to the bot."""
    await bot.add_cog(MessageEvents(bot))
    logger.debug("Message Events Loaded")


__all__ = ["MessageEvents", "setup"]
