"""
Invite Warden - Health Check Server
===================================

HTTP liveness endpoint for external keep-alive pingers.

DESIGN:
    Lightweight aiohttp server running inside the bot's event loop.

    Routes:
    - GET /      static "running" text
    - GET /ping  {"status": "alive", "uptime": <process uptime in seconds>}
"""

import time
from typing import Optional

import psutil
from aiohttp import web

from warden.core.logger import logger
from warden.core.constants import HEALTH_ROOT_TEXT, HEALTH_CHECK_HOST, HEALTH_CHECK_PORT


# =============================================================================
# Health Check Server
# =============================================================================

class HealthCheckServer:
    """
    Simple HTTP liveness server.

    Attributes:
        host: Interface to bind.
        port: Port number for the HTTP server.
        app: aiohttp Application instance.
        runner: aiohttp AppRunner for lifecycle management.
    """

    def __init__(self, host: str = HEALTH_CHECK_HOST, port: int = HEALTH_CHECK_PORT) -> None:
        self.host = host
        self.port = port
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None

        self.app.router.add_get("/", self.root_handler)
        self.app.router.add_get("/ping", self.ping_handler)

    # =========================================================================
    # Request Handlers
    # =========================================================================

    @staticmethod
    def get_uptime() -> float:
        """Seconds since this process started."""
        return max(0.0, time.time() - psutil.Process().create_time())

    async def root_handler(self, request: web.Request) -> web.Response:
        return web.Response(text=HEALTH_ROOT_TEXT)

    async def ping_handler(self, request: web.Request) -> web.Response:
        return web.json_response({
            "status": "alive",
            "uptime": self.get_uptime(),
        })

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    async def start(self) -> None:
        """
        Start the server without blocking the bot.

        A bind failure is logged and leaves the bot running.
        """
        try:
            self.runner = web.AppRunner(self.app)
            await self.runner.setup()
            site = web.TCPSite(self.runner, self.host, self.port)
            await site.start()

            logger.tree("Keep-Alive Server Started", [
                ("Host", self.host),
                ("Port", str(self.port)),
                ("Endpoints", "/, /ping"),
            ], emoji="🌐")

        except OSError as e:
            logger.error("Keep-Alive Server Startup Failed", [
                ("Port", str(self.port)),
                ("Error", str(e)[:100]),
            ])

    async def stop(self) -> None:
        """Stop the server. Safe to call even if it never started."""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            logger.info("Keep-alive server stopped")


__all__ = ["HealthCheckServer"]
