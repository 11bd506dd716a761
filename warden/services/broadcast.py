"""
Invite Warden - Broadcast Service
=================================

Sequential, paced direct-message delivery for /massdm.

DESIGN:
    Recipients are messaged one at a time with a fixed delay between
    attempts to stay under Discord's DM rate limits. Each recipient's
    failure is counted and the batch moves on. A cancellation check runs
    before every attempt; when it fires, no further messages are sent
    and the tallies so far are returned.

    The attachment is read once. discord.File objects are consumed by a
    send, so a fresh one is built for every recipient.
"""

import asyncio
import io
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

import discord

from warden.core.logger import logger


@dataclass
class BroadcastPayload:
    """Message body plus an optional attachment read into memory."""
    content: str
    attachment_name: Optional[str] = None
    attachment_data: Optional[bytes] = None

    @classmethod
    async def from_attachment(cls, content: str, attachment: Optional[discord.Attachment]) -> "BroadcastPayload":
        if attachment is None:
            return cls(content=content)
        data = await attachment.read()
        return cls(content=content, attachment_name=attachment.filename, attachment_data=data)

    def build_file(self) -> Optional[discord.File]:
        if self.attachment_data is None:
            return None
        return discord.File(io.BytesIO(self.attachment_data), filename=self.attachment_name)


@dataclass
class BroadcastResult:
    """Aggregate delivery outcome."""
    success_count: int = 0
    fail_count: int = 0
    cancelled: bool = False

    @property
    def attempted(self) -> int:
        return self.success_count + self.fail_count


class BroadcastService:
    """
    Paced DM sender.

    Args:
        delay: Seconds to wait between two delivery attempts.
        sleep: Awaitable sleep, injectable for tests.
    """

    def __init__(
        self,
        delay: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.delay = delay
        self._sleep = sleep

    async def broadcast(
        self,
        recipients: Iterable[discord.abc.User],
        payload: BroadcastPayload,
        should_cancel: Callable[[], bool] = lambda: False,
    ) -> BroadcastResult:
        """
        DM every recipient in order.

        Returns:
            BroadcastResult with independent success and failure counts.
        """
        result = BroadcastResult()
        first = True

        for recipient in recipients:
            if not first:
                await self._sleep(self.delay)
            first = False

            if should_cancel():
                result.cancelled = True
                logger.warning("Mass DM Cancelled", [
                    ("Sent", str(result.success_count)),
                    ("Failed", str(result.fail_count)),
                ])
                break

            try:
                file = payload.build_file()
                if file is not None:
                    await recipient.send(content=payload.content, file=file)
                else:
                    await recipient.send(content=payload.content)
                result.success_count += 1
            except Exception as e:
                result.fail_count += 1
                logger.debug(f"Mass DM to {recipient} ({recipient.id}) failed: {type(e).__name__}: {str(e)[:100]}")

        return result


__all__ = ["BroadcastService", "BroadcastPayload", "BroadcastResult"]
