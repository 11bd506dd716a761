"""
Invite Warden - Configuration Module
====================================

Centralized configuration management with environment variable validation.

DESIGN:
    Single source of truth for all configuration, loaded from environment
    variables at startup into a dataclass.

    Key patterns:
    - Singleton via get_config() ensures one Config instance
    - Validation happens once at load time, not on every access
    - Permission helpers centralize authorization logic
"""

import os
from dataclasses import dataclass
from typing import Optional

import discord

from warden.core import constants


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Bot configuration loaded from environment variables.

    Attributes:
        discord_token: Discord bot authentication token.
        required_invites: Valid invites needed before the reward role is granted.
        min_account_age_days: Minimum age of a joining account for its invite to count.
        spam_message_count: Messages inside the spam window that trigger a delete.
        spam_time_window_ms: Length of the sliding spam window.
        heartbeat_interval_ms: Interval between liveness messages.
        owner_role_name: Role name that grants owner privileges.
        member_role_name: Reward role granted for enough valid invites.
        log_channel_name: Text channel receiving liveness messages.
    """

    # -------------------------------------------------------------------------
    # Required: Discord
    # -------------------------------------------------------------------------

    discord_token: str

    # -------------------------------------------------------------------------
    # Optional: Invite Rewards
    # -------------------------------------------------------------------------

    required_invites: int = constants.REQUIRED_INVITES
    min_account_age_days: int = constants.MIN_ACCOUNT_AGE_DAYS

    # -------------------------------------------------------------------------
    # Optional: Anti-Spam
    # -------------------------------------------------------------------------

    spam_message_count: int = constants.SPAM_MESSAGE_COUNT
    spam_time_window_ms: int = constants.SPAM_TIME_WINDOW_MS

    # -------------------------------------------------------------------------
    # Optional: Liveness
    # -------------------------------------------------------------------------

    heartbeat_interval_ms: int = constants.HEARTBEAT_INTERVAL_MS
    health_host: str = constants.HEALTH_CHECK_HOST
    health_port: int = constants.HEALTH_CHECK_PORT

    # -------------------------------------------------------------------------
    # Optional: Names
    # -------------------------------------------------------------------------

    owner_role_name: str = constants.OWNER_ROLE_NAME
    member_role_name: str = constants.MEMBER_ROLE_NAME
    log_channel_name: str = constants.LOG_CHANNEL_NAME

    # -------------------------------------------------------------------------
    # Optional: Broadcast
    # -------------------------------------------------------------------------

    dm_delay_seconds: float = constants.DM_DELAY_SECONDS

    # -------------------------------------------------------------------------
    # Optional: Webhooks
    # -------------------------------------------------------------------------

    error_webhook_url: Optional[str] = None

    @property
    def spam_time_window(self) -> float:
        """Spam window length in seconds."""
        return self.spam_time_window_ms / constants.MS_PER_SECOND

    @property
    def heartbeat_interval(self) -> float:
        """Heartbeat interval in seconds."""
        return self.heartbeat_interval_ms / constants.MS_PER_SECOND


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


def _parse_int_with_default(value: Optional[str], default: int, name: str, min_val: int = None, max_val: int = None) -> int:
    """
    Parse optional integer with default and range validation.

    Args:
        value: String value from environment variable.
        default: Default value if not set or invalid.
        name: Variable name for warning messages.
        min_val: Minimum allowed value (inclusive).
        max_val: Maximum allowed value (inclusive).

    Returns:
        Parsed integer within valid range, or default.
    """
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        from warden.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default
    if min_val is not None and parsed < min_val:
        from warden.core.logger import logger
        logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
        return min_val
    if max_val is not None and parsed > max_val:
        from warden.core.logger import logger
        logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
        return max_val
    return parsed


def _parse_float_with_default(value: Optional[str], default: float, name: str, min_val: float = 0.0) -> float:
    """Parse optional non-negative float, falling back to default."""
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        from warden.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default
    if parsed < min_val:
        from warden.core.logger import logger
        logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
        return min_val
    return parsed


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """
    Validate URL format for webhooks.

    Returns:
        URL if valid, None if invalid or empty.
    """
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from warden.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If the bot token is missing.
    """
    discord_token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    if not discord_token:
        raise ConfigValidationError("Missing required environment variables: DISCORD_BOT_TOKEN")

    return Config(
        discord_token=discord_token,
        required_invites=_parse_int_with_default(
            os.getenv("REQUIRED_INVITES"), constants.REQUIRED_INVITES, "REQUIRED_INVITES", min_val=1
        ),
        min_account_age_days=_parse_int_with_default(
            os.getenv("MIN_ACCOUNT_AGE_DAYS"), constants.MIN_ACCOUNT_AGE_DAYS, "MIN_ACCOUNT_AGE_DAYS", min_val=0
        ),
        spam_message_count=_parse_int_with_default(
            os.getenv("SPAM_MESSAGE_COUNT"), constants.SPAM_MESSAGE_COUNT, "SPAM_MESSAGE_COUNT", min_val=2
        ),
        spam_time_window_ms=_parse_int_with_default(
            os.getenv("SPAM_TIME_WINDOW_MS"), constants.SPAM_TIME_WINDOW_MS, "SPAM_TIME_WINDOW_MS", min_val=100
        ),
        heartbeat_interval_ms=_parse_int_with_default(
            os.getenv("HEARTBEAT_INTERVAL_MS"), constants.HEARTBEAT_INTERVAL_MS, "HEARTBEAT_INTERVAL_MS", min_val=60000
        ),
        health_host=os.getenv("HEALTH_HOST", constants.HEALTH_CHECK_HOST),
        health_port=_parse_int_with_default(
            os.getenv("PORT"), constants.HEALTH_CHECK_PORT, "PORT", min_val=1, max_val=65535
        ),
        owner_role_name=os.getenv("OWNER_ROLE_NAME", constants.OWNER_ROLE_NAME),
        member_role_name=os.getenv("MEMBER_ROLE_NAME", constants.MEMBER_ROLE_NAME),
        log_channel_name=os.getenv("LOG_CHANNEL_NAME", constants.LOG_CHANNEL_NAME),
        dm_delay_seconds=_parse_float_with_default(
            os.getenv("DM_DELAY_SECONDS"), constants.DM_DELAY_SECONDS, "DM_DELAY_SECONDS"
        ),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


# =============================================================================
# Permission Helpers
# =============================================================================

def is_owner(member: Optional[discord.Member], config: Config) -> bool:
    """
    Check if a member is owner-equivalent.

    Owners are the guild owner or anyone holding the owner role by name.
    They bypass anti-spam and content filters and may run /massdm.
    """
    if member is None:
        return False
    guild = getattr(member, "guild", None)
    if guild is not None and guild.owner_id == member.id:
        return True
    return any(role.name == config.owner_role_name for role in getattr(member, "roles", []))


__all__ = [
    "Config",
    "ConfigValidationError",
    "load_config",
    "get_config",
    "is_owner",
]
