"""
Invite Warden - Main Bot Class
==============================

Core Discord client: owns the in-memory stores, wires the services and
manages the bot lifecycle.

Features:
- Invite attribution with anti-alt gating and reward role
- Anti-spam sliding window
- Mass-mention and blocked-link filter
- Owner-only /massdm broadcast
- Periodic heartbeat to #bot-logs
- Keep-alive HTTP endpoint
"""

import sys
from datetime import datetime
from typing import Optional

import discord
from discord.ext import commands

from warden.core.config import Config, get_config
from warden.core.health import HealthCheckServer
from warden.core.logger import logger
from warden.services.antispam import AntiSpamService
from warden.services.broadcast import BroadcastService
from warden.services.content_filter import ContentFilterService
from warden.services.heartbeat import HeartbeatService
from warden.services.invite_tracker import InviteTrackerService
from warden.state import InviteLedger, InviteSnapshotStore, SpamWindowStore
from warden.utils.error_handler import ErrorHandler


# =============================================================================
# WardenBot Class
# =============================================================================

class WardenBot(commands.Bot):
    """
    Main Discord bot class.

    DESIGN: Central orchestrator that:
    - Owns the invite snapshots, invite ledger and spam windows
    - Hands them to the services that read and write them
    - Routes events through the cogs in warden.events
    - Manages startup (invite sync, command registration, heartbeat)
      and shutdown

    SERVICE INITIALIZATION ORDER:
    1. __init__: stores and services (no network)
    2. setup_hook: cogs, keep-alive server
    3. on_ready: invite baseline per guild, per-guild command sync, heartbeat
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or get_config()

        intents = discord.Intents.default()
        intents.members = True
        intents.invites = True
        intents.message_content = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )

        self.start_time: datetime = datetime.now()

        # In-memory state (lost on restart)
        self.invite_snapshots = InviteSnapshotStore()
        self.invite_ledger = InviteLedger()
        self.spam_windows = SpamWindowStore()

        # Services
        self.invite_tracker = InviteTrackerService(self.config, self.invite_snapshots, self.invite_ledger)
        self.antispam = AntiSpamService(self.config, self.spam_windows)
        self.content_filter = ContentFilterService()
        self.broadcaster = BroadcastService(self.config.dm_delay_seconds)
        self.heartbeat = HeartbeatService(self.config, lambda: self.guilds)
        self.health_server = HealthCheckServer(self.config.health_host, self.config.health_port)

        # Ready state guard
        self._ready_initialized: bool = False

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Load cogs and start the keep-alive server before on_ready."""
        from warden.commands import COMMAND_COGS
        from warden.events import EVENT_COGS

        for cog in COMMAND_COGS + EVENT_COGS:
            try:
                await self.load_extension(cog)
            except commands.ExtensionError as e:
                logger.error("Failed to Load Cog", [("Cog", cog), ("Error", str(e))])

        await self.health_server.start()

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        """Baseline invites, register commands, start the heartbeat."""
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True

        if not self.user:
            return

        logger.tree("BOT ONLINE", [
            ("Name", str(self.user)),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
        ], emoji="🤖")

        for guild in self.guilds:
            await self.invite_tracker.sync_guild(guild)

        for guild in self.guilds:
            await self.register_commands(guild)

        self.heartbeat.start()

        logger.tree("WARDEN READY", [
            ("Invite Snapshots", str(len(self.invite_snapshots.guild_ids()))),
            ("Reward Role", f"{self.config.member_role_name} @ {self.config.required_invites} invites"),
            ("Min Account Age", f"{self.config.min_account_age_days} days"),
            ("Heartbeat", "Running" if self.heartbeat.running else "Stopped"),
        ], emoji="🚀")

    async def register_commands(self, guild: discord.Guild) -> None:
        """Copy the global command tree to a guild and sync it there."""
        try:
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.success(f"Registered {len(synced)} slash commands for guild: {guild.name}")
        except discord.HTTPException as e:
            logger.warning("Command Registration Failed", [
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Error", str(e)[:100]),
            ])

    # =========================================================================
    # Error Safety Net
    # =========================================================================

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        """Log any event handler error and keep running."""
        exc = sys.exc_info()[1]
        if exc is not None:
            ErrorHandler.handle(exc, location=f"event.{event_method}")

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def close(self) -> None:
        """Graceful shutdown with proper cleanup."""
        logger.info("Initiating Graceful Shutdown")

        self.heartbeat.stop()
        await self.health_server.stop()
        await super().close()

        logger.tree("SHUTDOWN COMPLETE", [
            ("Uptime", str(datetime.now() - self.start_time)),
        ], emoji="🛑")


__all__ = ["WardenBot"]
