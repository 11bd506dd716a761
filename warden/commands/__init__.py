"""
Invite Warden - Commands Package
================================

Slash command cogs, loaded dynamically by the bot with load_extension().

Available Commands:
    /massdm: DM every non-bot member of the server (owner only)
"""

# =============================================================================
# Command Cog Registry
# =============================================================================

COMMAND_COGS = [
    "warden.commands.massdm",
]
"""Command cog module paths, loaded by WardenBot.setup_hook()."""


__all__ = [
    "COMMAND_COGS",
]
