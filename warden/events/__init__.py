"""
Invite Warden - Events Package
==============================

Gateway event cogs. Each module holds a Cog with @commands.Cog.listener
handlers and a setup() entry point for load_extension().

Event routing:
- members.py: Member join -> invite attribution
- invites.py: Invite create/delete, guild join/remove -> snapshot upkeep
- messages.py: Message create -> owner exemption, anti-spam, content filter
"""

# =============================================================================
# Event Cog Registry
# =============================================================================

EVENT_COGS = [
    "warden.events.members",
    "warden.events.invites",
    "warden.events.messages",
]
"""Event cog module paths, loaded in order by WardenBot.setup_hook()."""


__all__ = [
    "EVENT_COGS",
]
