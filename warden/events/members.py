"""
Invite Warden - Member Events
=============================

Routes member joins to the invite tracker.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from warden.core.logger import logger
from warden.utils.error_handler import safe_execute

if TYPE_CHECKING:
    from warden.bot import WardenBot


class MemberEvents(commands.Cog):
    """Member event handlers."""

    def __init__(self, bot: "WardenBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    @safe_execute
    async def on_member_join(self, member: discord.Member) -> None:
        """
        Attribute the join to an invite and credit the inviter.

        Any failure is logged and dropped; the join is never retried.
        """
        logger.info(f"👤 {member} joined {member.guild.name}")
        await self.bot.invite_tracker.handle_member_join(member)


async def setup(bot: "WardenBot") -> None:
    """Add the member events cog to the bot."""
    await bot.add_cog(MemberEvents(bot))
    logger.debug("Member Events Loaded")


__all__ = ["MemberEvents", "setup"]
