"""
Invite Warden - Content Filter Tests
====================================

Tests for mass mention protection and the link blocker.
"""

import pytest

from warden.services.content_filter import (
    ContentFilterService,
    VIOLATION_BLOCKED_LINK,
    VIOLATION_MASS_MENTION,
    evaluate,
    find_blocked_link,
    has_mass_mention,
)


# =============================================================================
# Pattern Tests
# =============================================================================

class TestMassMention:
    """Tests for @everyone / @here detection."""

    @pytest.mark.parametrize("content", ["hey @everyone", "@here look", "x@everyone"])
    def test_detected(self, content):
        assert has_mass_mention(content) is True

    def test_plain_text(self):
        assert has_mass_mention("everyone is here") is False


class TestBlockedLinks:
    """Tests for the blocked link patterns."""

    @pytest.mark.parametrize("content,rule", [
        ("join discord.gg/abc123", "discord_invite"),
        ("https://discord.com/invite/xyz", "discord_invite"),
        ("discordapp.com/invite/old-server", "discord_invite"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "youtube"),
        ("youtu.be/dQw4w9WgXcQ", "youtube"),
        ("https://open.spotify.com/track/123abc", "spotify"),
        ("DISCORD.GG/SHOUTY", "discord_invite"),
    ])
    def test_blocked(self, content, rule):
        assert find_blocked_link(content) == rule

    @pytest.mark.parametrize("content", [
        "https://github.com/Rapptz/discord.py",
        "discord.gg",
        "i like youtube",
        "",
    ])
    def test_allowed(self, content):
        assert find_blocked_link(content) is None


class TestEvaluate:
    """Tests for rule ordering."""

    def test_mass_mention_checked_first(self):
        violation = evaluate("@everyone discord.gg/abc", can_mention_everyone=False)
        assert violation.kind == VIOLATION_MASS_MENTION

    def test_permitted_mention_falls_through_to_links(self):
        violation = evaluate("@everyone discord.gg/abc", can_mention_everyone=True)
        assert violation.kind == VIOLATION_BLOCKED_LINK
        assert violation.rule == "discord_invite"

    def test_permitted_mention_alone_is_clean(self):
        assert evaluate("@here meeting now", can_mention_everyone=True) is None

    def test_empty_content_is_clean(self):
        assert evaluate("", can_mention_everyone=False) is None


# =============================================================================
# Service Tests
# =============================================================================

class TestContentFilterService:
    """Tests for enforcement on live messages."""

    @pytest.mark.asyncio
    async def test_mass_mention_deleted(self, make_message):
        message = make_message("@everyone free nitro")

        violation = await ContentFilterService().enforce(message)

        assert violation.kind == VIOLATION_MASS_MENTION
        message.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_permitted_author_keeps_mention(self, make_message):
        message = make_message("@everyone standup in 5")
        message.author.guild_permissions.mention_everyone = True

        assert await ContentFilterService().enforce(message) is None
        message.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_link_deleted(self, make_message):
        message = make_message("check https://youtu.be/abc")

        violation = await ContentFilterService().enforce(message)

        assert violation.rule == "youtube"
        message.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_failure_swallowed(self, make_message, make_http_error):
        """Test a missing-permission delete does not raise."""
        message = make_message("discord.gg/raid")
        message.delete.side_effect = make_http_error()

        violation = await ContentFilterService().enforce(message)

        assert violation.kind == VIOLATION_BLOCKED_LINK

    @pytest.mark.asyncio
    async def test_clean_message_untouched(self, make_message):
        message = make_message("good morning")
        assert await ContentFilterService().enforce(message) is None
        message.delete.assert_not_called()
