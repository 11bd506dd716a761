"""
Invite Warden - Mass DM Cog
===========================

/massdm: send a direct message to every non-bot member of the server.

DESIGN:
    Owner only. The response is deferred (ephemeral) because the paced
    loop takes about one second per member. The final reply reports how
    many messages were delivered and how many failed. Any unexpected error
    is reported back to the invoker as a generic failure notice.
"""

from typing import TYPE_CHECKING, List, Optional

import discord
from discord import app_commands
from discord.ext import commands

from warden.core.config import is_owner
from warden.core.logger import logger
from warden.services.broadcast import BroadcastPayload, BroadcastResult
from warden.utils.error_handler import ErrorHandler

if TYPE_CHECKING:
    from warden.bot import WardenBot


DENIED_MESSAGE = "❌ Only users with the Owner role can use this command!"
ERROR_MESSAGE = "❌ An error occurred while processing the command."


def format_summary(result: BroadcastResult) -> str:
    lines = [
        "✅ Mass DM complete!" if not result.cancelled else "⚠️ Mass DM stopped early!",
        f"📤 Successfully sent: {result.success_count}",
        f"❌ Failed: {result.fail_count}",
    ]
    return "\n".join(lines)


class MassDMCog(commands.Cog):
    """Cog for the owner-only bulk DM command."""

    def __init__(self, bot: "WardenBot") -> None:
        self.bot = bot

    async def _fetch_recipients(self, guild: discord.Guild) -> List[discord.Member]:
        members = [member async for member in guild.fetch_members(limit=None)]
        return [member for member in members if not member.bot]

    @app_commands.command(name="massdm", description="Send a DM to all server members (Owner only)")
    @app_commands.describe(
        message="The message to send",
        attachment="Optional image/video/file to send",
    )
    @app_commands.guild_only()
    async def massdm(
        self,
        interaction: discord.Interaction,
        message: str,
        attachment: Optional[discord.Attachment] = None,
    ) -> None:
        try:
            await self._run_massdm(interaction, message, attachment)
        except Exception as e:
            ErrorHandler.handle(e, location="massdm", user=str(interaction.user))
            await self._send_error(interaction)

    async def _run_massdm(
        self,
        interaction: discord.Interaction,
        message: str,
        attachment: Optional[discord.Attachment],
    ) -> None:
        # -----------------------------------------------------------------
        # Authorization
        # -----------------------------------------------------------------
        if not is_owner(interaction.user, self.bot.config):
            logger.info(f"🔒 /massdm denied for {interaction.user} ({interaction.user.id})")
            await interaction.response.send_message(DENIED_MESSAGE, ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True, thinking=True)

        guild = interaction.guild
        payload = await BroadcastPayload.from_attachment(message, attachment)
        recipients = await self._fetch_recipients(guild)

        logger.tree("Mass DM Initiated", [
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Guild", guild.name),
            ("Recipients", str(len(recipients))),
            ("Attachment", attachment.filename if attachment else "None"),
        ], emoji="💬")

        result = await self.bot.broadcaster.broadcast(
            recipients,
            payload,
            should_cancel=lambda: guild.unavailable or self.bot.is_closed(),
        )

        await interaction.edit_original_response(content=format_summary(result))

        logger.tree("Mass DM Complete", [
            ("Sent", str(result.success_count)),
            ("Failed", str(result.fail_count)),
            ("Cancelled", str(result.cancelled)),
        ], emoji="💬")

    async def _send_error(self, interaction: discord.Interaction) -> None:
        """Generic failure notice, in whichever reply form is still open."""
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=ERROR_MESSAGE)
            else:
                await interaction.response.send_message(ERROR_MESSAGE, ephemeral=True)
        except discord.HTTPException:
            pass  # Interaction expired


async def setup(bot: "WardenBot") -> None:
    """Load the Mass DM cog."""
    await bot.add_cog(MassDMCog(bot))
    logger.tree("Mass DM Cog Loaded", [
        ("Commands", "/massdm"),
        ("Access", "Owner only"),
    ], emoji="💬")


__all__ = ["MassDMCog", "format_summary", "setup"]
