"""
Invite Warden - Config Tests
============================

Tests for environment loading and the owner check.
"""

import pytest

from warden.core import config as config_module
from warden.core.config import Config, ConfigValidationError, is_owner, load_config


ENV_VARS = [
    "DISCORD_BOT_TOKEN", "REQUIRED_INVITES", "MIN_ACCOUNT_AGE_DAYS", "SPAM_MESSAGE_COUNT",
    "SPAM_TIME_WINDOW_MS", "HEARTBEAT_INTERVAL_MS", "PORT", "HEALTH_HOST", "OWNER_ROLE_NAME",
    "MEMBER_ROLE_NAME", "LOG_CHANNEL_NAME", "DM_DELAY_SECONDS", "ERROR_WEBHOOK_URL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with none of the bot's variables set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    return monkeypatch


# =============================================================================
# Loading Tests
# =============================================================================

class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_token_raises(self, clean_env):
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_blank_token_raises(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "   ")
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_defaults(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "abc")

        config = load_config()

        assert config.discord_token == "abc"
        assert config.required_invites == 3
        assert config.min_account_age_days == 3
        assert config.spam_message_count == 5
        assert config.spam_time_window == 2.0
        assert config.heartbeat_interval == 4 * 60 * 60
        assert config.health_port == 3000
        assert config.owner_role_name == "Owner"
        assert config.member_role_name == "Member"
        assert config.log_channel_name == "bot-logs"
        assert config.error_webhook_url is None

    def test_overrides(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "abc")
        clean_env.setenv("REQUIRED_INVITES", "5")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("MEMBER_ROLE_NAME", "Verified")
        clean_env.setenv("DM_DELAY_SECONDS", "2.5")

        config = load_config()

        assert config.required_invites == 5
        assert config.health_port == 8080
        assert config.member_role_name == "Verified"
        assert config.dm_delay_seconds == 2.5

    def test_invalid_int_falls_back(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "abc")
        clean_env.setenv("REQUIRED_INVITES", "lots")
        assert load_config().required_invites == 3

    def test_out_of_range_clamped(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "abc")
        clean_env.setenv("PORT", "99999")
        assert load_config().health_port == 65535

    def test_bad_webhook_ignored(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "abc")
        clean_env.setenv("ERROR_WEBHOOK_URL", "not-a-url")
        assert load_config().error_webhook_url is None

    def test_get_config_is_cached(self, clean_env):
        clean_env.setenv("DISCORD_BOT_TOKEN", "abc")
        assert config_module.get_config() is config_module.get_config()


# =============================================================================
# Owner Check Tests
# =============================================================================

class TestIsOwner:
    """Tests for owner-equivalent detection."""

    def test_none(self):
        assert is_owner(None, Config(discord_token="x")) is False

    def test_guild_owner(self, config, make_member, guild):
        assert is_owner(make_member(user_id=guild.owner_id), config) is True

    def test_owner_role(self, config, make_member, make_role):
        assert is_owner(make_member(roles=[make_role(9, "Owner")]), config) is True

    def test_other_role(self, config, make_member, make_role):
        assert is_owner(make_member(roles=[make_role(9, "Moderator")]), config) is False

    def test_role_name_case_sensitive(self, config, make_member, make_role):
        assert is_owner(make_member(roles=[make_role(9, "owner")]), config) is False
