"""
Invite Warden - Anti-Spam Tests
===============================

Tests for the sliding window and the flood delete.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from warden.services.antispam import AntiSpamService
from warden.state import SpamWindow, SpamWindowStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def windows():
    return SpamWindowStore()


@pytest.fixture
def antispam(config, windows, clock):
    return AntiSpamService(config, windows, clock=clock)


# =============================================================================
# Window Tests
# =============================================================================

class TestSpamWindow:
    """Tests for the timestamp window itself."""

    def test_record_counts_recent(self):
        window = SpamWindow(user_id=1)
        assert window.record(0.0, 2.0) == 1
        assert window.record(1.0, 2.0) == 2

    def test_record_drops_expired(self):
        """Test timestamps exactly one window old fall out."""
        window = SpamWindow(user_id=1)
        window.record(0.0, 2.0)
        assert window.record(2.0, 2.0) == 1
        assert window.timestamps == [2.0]

    def test_reset(self):
        window = SpamWindow(user_id=1, timestamps=[1.0, 2.0])
        window.reset()
        assert window.timestamps == []

    def test_store_creates_lazily(self):
        store = SpamWindowStore()
        assert 5 not in store
        store.get(5)
        assert 5 in store
        assert len(store) == 1


# =============================================================================
# Service Tests
# =============================================================================

class TestAntiSpamService:
    """Tests for flood detection on live messages."""

    @pytest.mark.asyncio
    async def test_below_limit_not_deleted(self, antispam, make_message, clock):
        """Test four quick messages pass."""
        message = make_message()
        for _ in range(4):
            assert await antispam.check_message(message) is False
            clock.advance(0.1)
        message.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_fifth_message_deleted_and_window_reset(self, antispam, windows, make_member, make_message, clock):
        """Test the fifth message in the window is deleted and the window emptied."""
        author = make_member(user_id=7)
        messages = [make_message(author=author) for _ in range(6)]

        results = []
        for message in messages[:5]:
            results.append(await antispam.check_message(message))
            clock.advance(0.1)

        assert results == [False, False, False, False, True]
        messages[4].delete.assert_awaited_once()
        assert windows.get(7).timestamps == []

        assert await antispam.check_message(messages[5]) is False
        assert len(windows.get(7).timestamps) == 1

    @pytest.mark.asyncio
    async def test_slow_messages_never_trip(self, antispam, make_message, clock):
        """Test messages spaced beyond the window never accumulate."""
        message = make_message()
        for _ in range(10):
            assert await antispam.check_message(message) is False
            clock.advance(2.0)
        message.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_failure_swallowed(self, antispam, windows, make_member, make_message, make_http_error):
        """Test a failed delete still resets the window."""
        author = make_member(user_id=8)
        message = make_message(author=author)
        message.delete.side_effect = make_http_error()

        for _ in range(4):
            await antispam.check_message(message)
        assert await antispam.check_message(message) is True
        assert windows.get(8).timestamps == []

    @pytest.mark.asyncio
    async def test_users_tracked_separately(self, antispam, make_member, make_message):
        """Test two users interleaving never trip each other's limit."""
        first = make_message(author=make_member(user_id=1))
        second = make_message(author=make_member(user_id=2))

        for _ in range(4):
            assert await antispam.check_message(first) is False
            assert await antispam.check_message(second) is False

    @pytest.mark.asyncio
    async def test_window_expiry_drops_oldest(self, antispam, windows, make_member, make_message, clock):
        """Test a message older than the window no longer counts toward the limit."""
        author = make_member(user_id=9)
        message = make_message(author=author)
        start = clock.now

        for offset in (0.0, 0.1, 0.2, 0.3):
            clock.now = start + offset
            assert await antispam.check_message(message) is False

        clock.now = start + 2.05
        assert await antispam.check_message(message) is False

        message.delete.assert_not_called()
        assert start not in windows.get(9).timestamps
        assert len(windows.get(9).timestamps) == 4


class TestAntiSpamConcurrency:
    """Tests for per-user serialisation of window updates."""

    @pytest.mark.asyncio
    async def test_message_during_delete_starts_fresh_window(self, antispam, windows, make_member, make_message):
        """Test a sixth message arriving while the fifth is being deleted counts as one."""
        author = make_member(user_id=10)
        messages = [make_message(author=author) for _ in range(6)]

        async def slow_delete():
            await asyncio.sleep(0.01)

        messages[4].delete = AsyncMock(side_effect=slow_delete)

        results = await asyncio.gather(*(antispam.check_message(m) for m in messages))

        assert results == [False, False, False, False, True, False]
        messages[4].delete.assert_awaited_once()
        messages[5].delete.assert_not_called()
        assert len(windows.get(10).timestamps) == 1
