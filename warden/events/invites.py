"""
Invite Warden - Invite Events
=============================

Keeps the invite snapshots current between joins:

- on_invite_create / on_invite_delete: incremental snapshot edits
- on_guild_join: baseline snapshot + command registration for the new guild
- on_guild_remove: drop the guild's snapshot
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from warden.core.logger import logger
from warden.utils.error_handler import safe_execute

if TYPE_CHECKING:
    from warden.bot import WardenBot


class InviteEvents(commands.Cog):
    """Invite and guild membership handlers."""

    def __init__(self, bot: "WardenBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    @safe_execute
    async def on_invite_create(self, invite: discord.Invite) -> None:
        if invite.guild is None:
            return
        await self.bot.invite_tracker.on_invite_create(invite.guild.id, invite.code, invite.uses)

    @commands.Cog.listener()
    @safe_execute
    async def on_invite_delete(self, invite: discord.Invite) -> None:
        if invite.guild is None:
            return
        await self.bot.invite_tracker.on_invite_delete(invite.guild.id, invite.code)

    @commands.Cog.listener()
    @safe_execute
    async def on_guild_join(self, guild: discord.Guild) -> None:
        logger.tree("Joined New Guild", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Members", str(guild.member_count)),
        ], emoji="➕")
        await self.bot.invite_tracker.sync_guild(guild)
        await self.bot.register_commands(guild)

    @commands.Cog.listener()
    @safe_execute
    async def on_guild_remove(self, guild: discord.Guild) -> None:
        self.bot.invite_tracker.forget_guild(guild.id)
        logger.tree("Left Guild", [
            ("Guild", f"{guild.name} ({guild.id})"),
        ], emoji="➖")


async def setup(bot: "WardenBot") -> None:
    """Add the invite events cog to the bot."""
    await bot.add_cog(InviteEvents(bot))
    logger.debug("Invite Events Loaded")


__all__ = ["InviteEvents", "setup"]
