"""
Invite Warden - Invite Ledger
=============================

Accumulated valid-invite count per (guild, inviter).

DESIGN:
    Counts only ever go up and entries are never evicted, so memory grows
    with the number of distinct inviters per guild. That is slow, bounded
    growth and acceptable for a single process.
"""

from collections import defaultdict
from typing import Dict


class InviteLedger:
    """Valid invite counts keyed by guild ID, then inviter user ID."""

    def __init__(self) -> None:
        self._counts: Dict[int, Dict[int, int]] = defaultdict(dict)

    def increment(self, guild_id: int, user_id: int) -> int:
        """
        Credit one valid invite.

        Returns:
            The inviter's new count.
        """
        guild_counts = self._counts[guild_id]
        guild_counts[user_id] = guild_counts.get(user_id, 0) + 1
        return guild_counts[user_id]

    def get(self, guild_id: int, user_id: int) -> int:
        return self._counts.get(guild_id, {}).get(user_id, 0)

    def __len__(self) -> int:
        return sum(len(guild_counts) for guild_counts in self._counts.values())


__all__ = ["InviteLedger"]
