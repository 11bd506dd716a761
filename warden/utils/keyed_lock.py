"""
Invite Warden - Keyed Lock
==========================

One asyncio.Lock per key (guild ID, user ID, ...).

DESIGN:
    Handlers suspend at every Discord API call, so two events for the same
    guild or user can interleave their read-modify-write sequences.
    Wrapping the sequence in `async with locks.hold(key)` serialises it per
    key while unrelated keys keep running concurrently.

    Locks are created on first use and dropped once no task holds or waits
    on them, so the map only holds keys with work in flight.

Usage:
    locks = KeyedLock()

    async with locks.hold(guild.id):
        ...
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable


class KeyedLock:
    """Per-key asyncio mutex with automatic cleanup."""

    def __init__(self) -> None:
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._users: Dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Acquire the lock for `key` for the duration of the block."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


__all__ = ["KeyedLock"]
