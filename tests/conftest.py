"""
Invite Warden - Test Fixtures
=============================

Shared fixtures for all tests.

Discord objects are MagicMock/AsyncMock stand-ins; the real discord.py is
imported for exception types and helpers such as discord.utils.get.
"""

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Log files go to a throwaway directory; the logger creates it on import
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="warden-logs-"))

import discord

from warden.core.config import Config


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def http_error(cls=discord.HTTPException, status: int = 500, text: str = "error"):
    """Build a discord.py HTTP exception without a live response."""
    response = MagicMock()
    response.status = status
    response.reason = "Test"
    return cls(response, text)


@pytest.fixture
def now():
    """Fixed aware UTC timestamp used as the clock for age checks."""
    return NOW


@pytest.fixture
def make_http_error():
    """Factory for discord.py HTTP exceptions."""
    return http_error


# =============================================================================
# Config
# =============================================================================

@pytest.fixture
def config():
    """Config with the stock defaults and a dummy token."""
    return Config(discord_token="test-token", dm_delay_seconds=0.0)


# =============================================================================
# Discord Object Factories
# =============================================================================

@pytest.fixture
def make_role():
    """Factory for roles with a real .name attribute."""
    def _create(role_id: int, name: str):
        role = MagicMock()
        role.id = role_id
        role.name = name
        return role
    return _create


@pytest.fixture
def make_user():
    """Factory for plain users (invite creators)."""
    def _create(user_id: int = 500, name: str = "inviter"):
        user = MagicMock()
        user.id = user_id
        user.name = name
        user.__str__.return_value = name
        return user
    return _create


@pytest.fixture
def make_invite():
    """Factory for invites with a code, use count and inviter."""
    def _create(code: str, uses, inviter=None):
        invite = MagicMock()
        invite.code = code
        invite.uses = uses
        invite.inviter = inviter
        return invite
    return _create


@pytest.fixture
def guild(make_role):
    """Guild with a Member role, a #bot-logs channel and no invites."""
    guild = MagicMock()
    guild.id = 1000
    guild.name = "Test Guild"
    guild.owner_id = 1
    guild.unavailable = False
    guild.member_count = 10
    guild.invites = AsyncMock(return_value=[])
    guild.roles = [make_role(2000, "Member"), make_role(2001, "Owner")]
    guild.get_member = MagicMock(return_value=None)
    guild.fetch_member = AsyncMock(side_effect=http_error(discord.NotFound, 404, "Unknown Member"))

    log_channel = MagicMock()
    log_channel.name = "bot-logs"
    log_channel.send = AsyncMock()
    guild.text_channels = [log_channel]
    return guild


@pytest.fixture
def make_member(guild):
    """Factory for guild members."""
    def _create(
        user_id: int = 42,
        name: str = "member",
        created_at: datetime = None,
        roles: list = None,
        bot: bool = False,
        member_guild=None,
    ):
        member = MagicMock()
        member.id = user_id
        member.name = name
        member.__str__.return_value = name
        member.bot = bot
        member.guild = member_guild or guild
        member.created_at = created_at or (NOW - timedelta(days=30))
        member.roles = roles if roles is not None else []
        member.add_roles = AsyncMock()
        member.send = AsyncMock()
        member.guild_permissions.mention_everyone = False
        return member
    return _create


@pytest.fixture
def make_message(guild, make_member):
    """Factory for guild messages."""
    def _create(content: str = "hello", author=None, message_guild=guild):
        message = MagicMock()
        message.content = content
        message.author = author or make_member()
        message.guild = message_guild
        message.delete = AsyncMock()
        return message
    return _create


@pytest.fixture
def mock_bot(config):
    """Bot stand-in exposing the attributes cogs read."""
    bot = MagicMock()
    bot.config = config
    bot.is_closed = MagicMock(return_value=False)
    bot.antispam.check_message = AsyncMock(return_value=False)
    bot.content_filter.enforce = AsyncMock(return_value=None)
    bot.invite_tracker.handle_member_join = AsyncMock()
    bot.invite_tracker.sync_guild = AsyncMock(return_value=True)
    bot.invite_tracker.on_invite_create = AsyncMock()
    bot.invite_tracker.on_invite_delete = AsyncMock()
    bot.invite_tracker.forget_guild = MagicMock()
    bot.register_commands = AsyncMock()
    return bot
