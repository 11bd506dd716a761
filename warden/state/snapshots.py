"""
Invite Warden - Invite Snapshot Store
=====================================

Per-guild mapping of invite code to use count. This is the baseline that
each fresh invite fetch is diffed against to find which invite a new
member used.

DESIGN:
    get() hands out copies so a caller holding an old snapshot never sees
    it change under it. A code that is missing from a snapshot counts as
    0 uses for diffing (deleted or never seen).
"""

from typing import Dict, Iterable, Optional


class InviteSnapshotStore:
    """Invite use-count snapshots keyed by guild ID."""

    def __init__(self) -> None:
        self._snapshots: Dict[int, Dict[str, int]] = {}

    def get(self, guild_id: int) -> Dict[str, int]:
        """Copy of the stored snapshot, empty if the guild has none."""
        return dict(self._snapshots.get(guild_id, {}))

    def has(self, guild_id: int) -> bool:
        return guild_id in self._snapshots

    def replace(self, guild_id: int, snapshot: Dict[str, int]) -> None:
        """Swap the guild's snapshot wholesale."""
        self._snapshots[guild_id] = dict(snapshot)

    def set_uses(self, guild_id: int, code: str, uses: Optional[int]) -> None:
        """Insert or overwrite one code, creating the guild entry if needed."""
        self._snapshots.setdefault(guild_id, {})[code] = uses or 0

    def remove(self, guild_id: int, code: str) -> bool:
        """
        Drop one code.

        Returns:
            True if the code was tracked.
        """
        snapshot = self._snapshots.get(guild_id)
        if snapshot is None:
            return False
        return snapshot.pop(code, None) is not None

    def forget(self, guild_id: int) -> None:
        self._snapshots.pop(guild_id, None)

    def guild_ids(self) -> Iterable[int]:
        return list(self._snapshots.keys())


def build_snapshot(invites: Iterable) -> Dict[str, int]:
    """Build a code -> uses mapping from discord.Invite objects."""
    return {invite.code: invite.uses or 0 for invite in invites}


__all__ = ["InviteSnapshotStore", "build_snapshot"]
