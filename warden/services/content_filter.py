"""
Invite Warden - Content Filter
==============================

Stateless per-message checks, evaluated in order, first match wins:

1. Mass mention: @everyone / @here from a member without the
   Mention Everyone permission
2. Blocked link: Discord invites, YouTube and Spotify links

A match deletes the message best-effort. Delete failures are swallowed.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

import discord

from warden.core.constants import LOG_TRUNCATE_CONTENT
from warden.core.logger import logger
from warden.utils.async_utils import best_effort_delete


# =============================================================================
# Patterns
# =============================================================================

MASS_MENTION_MARKERS = ("@everyone", "@here")

BLOCKED_LINK_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("discord_invite", re.compile(r'discord\.gg/[\w-]+', re.IGNORECASE)),
    ("discord_invite", re.compile(r'discord\.com/invite/[\w-]+', re.IGNORECASE)),
    ("discord_invite", re.compile(r'discordapp\.com/invite/[\w-]+', re.IGNORECASE)),
    ("youtube", re.compile(r'(?:https?://)?(?:www\.)?(?:youtube\.com|youtu\.be)/[\w\-?=&]+', re.IGNORECASE)),
    ("spotify", re.compile(r'(?:https?://)?(?:open\.)?spotify\.com/[\w\-?=&/]+', re.IGNORECASE)),
]
"""Ordered (rule name, pattern) pairs. The first matching rule is reported."""


# =============================================================================
# Violations
# =============================================================================

VIOLATION_MASS_MENTION = "mass_mention"
VIOLATION_BLOCKED_LINK = "blocked_link"


@dataclass
class ContentViolation:
    """A content policy match."""
    kind: str
    rule: str


def has_mass_mention(content: str) -> bool:
    return any(marker in content for marker in MASS_MENTION_MARKERS)


def find_blocked_link(content: str) -> Optional[str]:
    """Name of the first blocked-link rule that matches, or None."""
    for rule, pattern in BLOCKED_LINK_PATTERNS:
        if pattern.search(content):
            return rule
    return None


def evaluate(content: str, can_mention_everyone: bool) -> Optional[ContentViolation]:
    """Run the checks in order and return the first violation."""
    if not content:
        return None

    if has_mass_mention(content) and not can_mention_everyone:
        return ContentViolation(kind=VIOLATION_MASS_MENTION, rule="everyone_here")

    rule = find_blocked_link(content)
    if rule:
        return ContentViolation(kind=VIOLATION_BLOCKED_LINK, rule=rule)

    return None


# =============================================================================
# Content Filter Service
# =============================================================================

class ContentFilterService:
    """Applies the content checks to live messages."""

    async def enforce(self, message: discord.Message) -> Optional[ContentViolation]:
        """
        Delete the message if it violates a content rule.

        Returns:
            The violation found, or None if the message is clean.
        """
        permissions = getattr(message.author, "guild_permissions", None)
        can_mention_everyone = bool(permissions and permissions.mention_everyone)

        violation = evaluate(message.content or "", can_mention_everyone)
        if violation is None:
            return None

        await best_effort_delete(message, "Content Filter Delete")

        if violation.kind == VIOLATION_MASS_MENTION:
            title, emoji = "@everyone Protection: Message Deleted", "🚫"
        else:
            title, emoji = "Link Blocker: Message Deleted", "🔗"

        logger.tree(title, [
            ("User", f"{message.author} ({message.author.id})"),
            ("Rule", violation.rule),
            ("Content", message.content[:LOG_TRUNCATE_CONTENT]),
        ], emoji=emoji)
        return violation


__all__ = [
    "ContentFilterService",
    "ContentViolation",
    "BLOCKED_LINK_PATTERNS",
    "VIOLATION_MASS_MENTION",
    "VIOLATION_BLOCKED_LINK",
    "evaluate",
    "find_blocked_link",
    "has_mass_mention",
]
