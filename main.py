#!/usr/bin/env python3
"""
Invite Warden - Entry Point
===========================

Loads configuration, installs the global error safety net and runs the bot.

Exit codes:
- 0: stopped normally (Ctrl+C)
- 1: missing DISCORD_BOT_TOKEN, rejected token, or fatal startup error
"""

import asyncio
import sys

import discord
from dotenv import load_dotenv

from warden.core.config import ConfigValidationError, get_config
from warden.core.logger import logger
from warden.utils.error_handler import ErrorHandler


async def main() -> None:
    """
    Main entry point.

    Handles the bot lifecycle:
    1. Loads .env and validates configuration
    2. Installs the asyncio exception handler (log and keep running)
    3. Connects to Discord until interrupted

    Raises:
        SystemExit: If the token is missing or login fails
    """
    load_dotenv()

    try:
        config = get_config()
    except ConfigValidationError as e:
        logger.error(f"❌ {e}")
        logger.error("   Please add DISCORD_BOT_TOKEN to your environment or .env file")
        sys.exit(1)

    if config.error_webhook_url:
        logger.set_webhook(config.error_webhook_url)

    asyncio.get_running_loop().set_exception_handler(ErrorHandler.asyncio_exception_handler)

    from warden.bot import WardenBot

    bot = WardenBot(config)

    try:
        async with bot:
            await bot.start(config.discord_token)
    except discord.LoginFailure as e:
        logger.error("❌ Failed to login", [("Error", str(e))])
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("🛑 Bot stopped by user (Ctrl+C)")
    except Exception as e:
        ErrorHandler.handle(e, location="main.__main__", critical=True)
        sys.exit(1)
