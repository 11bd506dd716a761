"""
Invite Warden - Invite Tracker Service
======================================

Attributes each member join to the invite that brought them in and rewards
inviters with a role once they reach the required number of valid invites.

DESIGN:
    Discord does not say which invite a member used. The service keeps a
    snapshot of every invite's use count per guild; on a join it fetches
    the live list and the first invite whose count went up is the one that
    was used. The snapshot is then replaced wholesale, even when no match
    was found, so drift never compounds.

    Fetch, diff, replace and credit run under a per-guild lock. Two joins
    arriving back to back would otherwise both diff against the same
    snapshot.

    Flow per join:
    1. Fetch invites, diff against the stored snapshot
    2. Replace the snapshot
    3. No match or no inviter -> log and stop
    4. Joining account younger than the minimum age -> anti-alt, stop
    5. Credit the inviter, grant the reward role at the threshold

    When two codes increase in the same fetch, the first one in the order
    Discord returned them wins. That order is not guaranteed stable.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Tuple

import discord

from warden.core.config import Config
from warden.core.constants import SECONDS_PER_DAY, LOG_TRUNCATE_SHORT
from warden.core.logger import logger
from warden.state.ledger import InviteLedger
from warden.state.snapshots import InviteSnapshotStore, build_snapshot
from warden.utils.keyed_lock import KeyedLock


# =============================================================================
# Outcomes
# =============================================================================

OUTCOME_FETCH_FAILED = "fetch_failed"
OUTCOME_UNKNOWN_INVITER = "unknown_inviter"
OUTCOME_TOO_YOUNG = "too_young"
OUTCOME_COUNTED = "counted"


@dataclass
class AttributionResult:
    """What happened to one member join."""
    outcome: str
    invite_code: Optional[str] = None
    inviter_id: Optional[int] = None
    invite_count: int = 0
    role_granted: bool = False


# =============================================================================
# Diffing
# =============================================================================

def find_used_invite(
    old_snapshot: Dict[str, int],
    invites: Iterable[discord.Invite],
) -> Optional[discord.Invite]:
    """
    First invite whose use count rose above the snapshot.

    Codes missing from the snapshot count as 0 uses. Iteration follows
    the order of `invites`.
    """
    for invite in invites:
        if (invite.uses or 0) > old_snapshot.get(invite.code, 0):
            return invite
    return None


def get_account_age_days(user: discord.abc.User, now: datetime) -> float:
    """Fractional account age in days."""
    return (now - user.created_at).total_seconds() / SECONDS_PER_DAY


# =============================================================================
# Invite Tracker Service
# =============================================================================

class InviteTrackerService:
    """
    Invite attribution engine plus the inviter reward flow.

    All state is injected so tests can build a fresh service per case.
    """

    def __init__(
        self,
        config: Config,
        snapshots: InviteSnapshotStore,
        ledger: InviteLedger,
        now: Callable[[], datetime] = discord.utils.utcnow,
    ) -> None:
        self.config = config
        self.snapshots = snapshots
        self.ledger = ledger
        self._now = now
        self._locks = KeyedLock()

    # =========================================================================
    # Baseline Sync
    # =========================================================================

    async def sync_guild(self, guild: discord.Guild) -> bool:
        """
        Fetch and store a full invite snapshot with no attribution.

        Used on startup and when the bot joins a guild.

        Returns:
            True if the snapshot was refreshed.
        """
        async with self._locks.hold(guild.id):
            try:
                invites = await guild.invites()
            except discord.HTTPException as e:
                logger.warning("Could Not Load Invites", [
                    ("Guild", f"{guild.name} ({guild.id})"),
                    ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
                ])
                return False

            self.snapshots.replace(guild.id, build_snapshot(invites))

        logger.tree("Invites Loaded", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Invites", str(len(invites))),
        ], emoji="✅")
        return True

    def forget_guild(self, guild_id: int) -> None:
        self.snapshots.forget(guild_id)

    # =========================================================================
    # Incremental Updates
    # =========================================================================

    async def on_invite_create(self, guild_id: int, code: str, uses: Optional[int]) -> None:
        async with self._locks.hold(guild_id):
            self.snapshots.set_uses(guild_id, code, uses)
        logger.info(f"🔗 New invite created: {code}")

    async def on_invite_delete(self, guild_id: int, code: str) -> None:
        async with self._locks.hold(guild_id):
            removed = self.snapshots.remove(guild_id, code)
        if removed:
            logger.info(f"🗑️ Invite deleted: {code}")

    # =========================================================================
    # Member Join
    # =========================================================================

    async def handle_member_join(self, member: discord.Member) -> AttributionResult:
        """
        Attribute a join and credit the inviter.

        Returns:
            AttributionResult describing the outcome.
        """
        guild = member.guild

        async with self._locks.hold(guild.id):
            if not self.snapshots.has(guild.id):
                logger.warning("No Invite Baseline", [
                    ("Guild", f"{guild.name} ({guild.id})"),
                    ("Effect", "Any invite with uses counts as the one used"),
                ])

            attribution = await self._attribute(guild, member)
            if attribution is None:
                return AttributionResult(outcome=OUTCOME_FETCH_FAILED)

            used_invite, inviter = attribution
            if used_invite is None or inviter is None:
                logger.tree("Could Not Determine Inviter", [
                    ("User", f"{member} ({member.id})"),
                    ("Guild", guild.name),
                    ("Invite", used_invite.code if used_invite else "Unknown"),
                ], emoji="⚠️")
                return AttributionResult(
                    outcome=OUTCOME_UNKNOWN_INVITER,
                    invite_code=used_invite.code if used_invite else None,
                )

            account_age = get_account_age_days(member, self._now())
            if account_age < self.config.min_account_age_days:
                logger.tree("Anti-Alt: Invite Ignored", [
                    ("User", f"{member} ({member.id})"),
                    ("Account Age", f"{account_age:.1f} days"),
                    ("Minimum", f"{self.config.min_account_age_days} days"),
                    ("Inviter", f"{inviter} ({inviter.id})"),
                ], emoji="🚫")
                return AttributionResult(
                    outcome=OUTCOME_TOO_YOUNG,
                    invite_code=used_invite.code,
                    inviter_id=inviter.id,
                    invite_count=self.ledger.get(guild.id, inviter.id),
                )

            invite_count = self.ledger.increment(guild.id, inviter.id)
            logger.tree("Invite Counted", [
                ("User", f"{member} ({member.id})"),
                ("Invite", used_invite.code),
                ("Inviter", f"{inviter} ({inviter.id})"),
                ("Valid Invites", str(invite_count)),
            ], emoji="📊")

            role_granted = False
            if invite_count >= self.config.required_invites:
                role_granted = await self._reward_inviter(guild, inviter.id, invite_count)

        return AttributionResult(
            outcome=OUTCOME_COUNTED,
            invite_code=used_invite.code,
            inviter_id=inviter.id,
            invite_count=invite_count,
            role_granted=role_granted,
        )

    async def _attribute(
        self,
        guild: discord.Guild,
        member: discord.Member,
    ) -> Optional[Tuple[Optional[discord.Invite], Optional[discord.abc.User]]]:
        """
        Fetch, diff and replace the snapshot. Caller holds the guild lock.

        Returns:
            (used_invite, inviter), either may be None; None if the fetch failed.
        """
        try:
            new_invites = await guild.invites()
        except discord.HTTPException as e:
            logger.error("Invite Fetch Failed On Join", [
                ("User", f"{member} ({member.id})"),
                ("Guild", f"{guild.name} ({guild.id})"),
                ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
            ])
            return None

        old_snapshot = self.snapshots.get(guild.id)
        used_invite = find_used_invite(old_snapshot, new_invites)
        self.snapshots.replace(guild.id, build_snapshot(new_invites))

        inviter = used_invite.inviter if used_invite else None
        return used_invite, inviter

    # =========================================================================
    # Reward Role
    # =========================================================================

    async def _resolve_member(self, guild: discord.Guild, user_id: int) -> Optional[discord.Member]:
        member = guild.get_member(user_id)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(user_id)
        except discord.HTTPException:
            return None

    async def _reward_inviter(self, guild: discord.Guild, inviter_id: int, invite_count: int) -> bool:
        """
        Grant the reward role if the inviter does not already have it.

        Returns:
            True if the role was added by this call.
        """
        inviter_member = await self._resolve_member(guild, inviter_id)
        if inviter_member is None:
            logger.debug(f"Inviter {inviter_id} no longer in {guild.name}, skipping reward")
            return False

        reward_role = discord.utils.get(guild.roles, name=self.config.member_role_name)
        if reward_role is None:
            logger.warning(f'Role "{self.config.member_role_name}" not found in guild: {guild.name}')
            return False

        if any(role.id == reward_role.id for role in inviter_member.roles):
            return False

        try:
            await inviter_member.add_roles(reward_role, reason=f"Reached {invite_count} valid invites")
        except discord.HTTPException as e:
            logger.error("Reward Role Grant Failed", [
                ("Inviter", f"{inviter_member} ({inviter_member.id})"),
                ("Role", reward_role.name),
                ("Error", str(e)[:LOG_TRUNCATE_SHORT]),
            ])
            return False

        logger.tree("Auto-Role Granted", [
            ("Inviter", f"{inviter_member} ({inviter_member.id})"),
            ("Role", reward_role.name),
            ("Valid Invites", str(invite_count)),
        ], emoji="🎟️")
        return True


__all__ = [
    "InviteTrackerService",
    "AttributionResult",
    "find_used_invite",
    "get_account_age_days",
    "OUTCOME_FETCH_FAILED",
    "OUTCOME_UNKNOWN_INVITER",
    "OUTCOME_TOO_YOUNG",
    "OUTCOME_COUNTED",
]
