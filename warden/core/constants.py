"""
Invite Warden - Centralized Constants
=====================================

Default values for every tunable threshold. The running values live on
Config and can be overridden through environment variables.
"""

# =============================================================================
# Time Constants
# =============================================================================

SECONDS_PER_DAY = 86400
MS_PER_SECOND = 1000

# =============================================================================
# Invite Rewards
# =============================================================================

REQUIRED_INVITES = 3                  # Valid invites needed for the reward role
MIN_ACCOUNT_AGE_DAYS = 3              # Younger accounts never count as invites

# =============================================================================
# Anti-Spam
# =============================================================================

SPAM_MESSAGE_COUNT = 5                # Messages inside the window that trigger a delete
SPAM_TIME_WINDOW_MS = 2000            # Sliding window length

# =============================================================================
# Liveness
# =============================================================================

HEARTBEAT_INTERVAL_MS = 4 * 60 * 60 * MS_PER_SECOND
HEARTBEAT_MESSAGE = "❤️ Still alive"

HEALTH_CHECK_HOST = "0.0.0.0"
HEALTH_CHECK_PORT = 3000
HEALTH_ROOT_TEXT = "🤖 Discord Bot is running!"

# =============================================================================
# Names
# =============================================================================

OWNER_ROLE_NAME = "Owner"
MEMBER_ROLE_NAME = "Member"
LOG_CHANNEL_NAME = "bot-logs"

# =============================================================================
# Broadcast
# =============================================================================

DM_DELAY_SECONDS = 1.0                # Pacing between direct messages

# =============================================================================
# Logging
# =============================================================================

LOG_TRUNCATE_SHORT = 100              # Error strings in log trees
LOG_TRUNCATE_CONTENT = 50             # Message content previews
