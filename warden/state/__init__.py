"""
Invite Warden - State Package
=============================

In-memory stores owned by the running bot. Nothing here persists across
restarts: invite snapshots are rebuilt from the gateway on startup, the
ledger and spam windows start empty.

- snapshots.py: Invite code -> use count per guild
- ledger.py: Valid invite count per (guild, inviter)
- spam_windows.py: Recent message timestamps per user
"""

from .snapshots import InviteSnapshotStore
from .ledger import InviteLedger
from .spam_windows import SpamWindow, SpamWindowStore


__all__ = [
    "InviteSnapshotStore",
    "InviteLedger",
    "SpamWindow",
    "SpamWindowStore",
]
