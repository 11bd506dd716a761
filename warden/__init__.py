"""
Invite Warden - Source Package
==============================

Moderation and engagement bot for a Discord community.

Package Structure:
- bot.py: Main Discord bot class, service wiring and lifecycle
- commands/: Slash command implementations (/massdm)
- core/: Configuration, logging and the liveness server
- events/: Gateway event routing cogs
- services/: Invite attribution, anti-spam, content filter, broadcast, heartbeat
- state/: In-memory stores (invite snapshots, ledger, spam windows)
- utils/: Locks, async helpers and error handling

Version: v1.0.0
"""

__version__ = "1.0.0"
