"""
Invite Warden - Spam Windows
============================

Sliding window of recent message timestamps per user.

DESIGN:
    Timestamps are plain floats from a monotonic clock (seconds). The
    window only ever holds timestamps strictly younger than its length at
    the time of the last update, and is emptied outright when the
    threshold trips, so the next message starts counting from one.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class SpamWindow:
    """Recent message timestamps for one user."""
    user_id: int
    timestamps: List[float] = field(default_factory=list)

    def record(self, now: float, window: float) -> int:
        """
        Add a message at `now` and drop everything outside the window.

        Returns:
            Number of messages left in the window.
        """
        self.timestamps.append(now)
        self.timestamps = [t for t in self.timestamps if now - t < window]
        return len(self.timestamps)

    def reset(self) -> None:
        self.timestamps = []


class SpamWindowStore:
    """SpamWindow per user ID, created lazily."""

    def __init__(self) -> None:
        self._windows: Dict[int, SpamWindow] = {}

    def get(self, user_id: int) -> SpamWindow:
        window = self._windows.get(user_id)
        if window is None:
            window = SpamWindow(user_id=user_id)
            self._windows[user_id] = window
        return window

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._windows

    def __len__(self) -> int:
        return len(self._windows)


__all__ = ["SpamWindow", "SpamWindowStore"]
