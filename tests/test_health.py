"""
Invite Warden - Health Check Tests
==================================

Tests for the keep-alive HTTP handlers.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from warden.core.health import HealthCheckServer


class TestHealthHandlers:
    """Tests for the route handlers, called directly."""

    @pytest.mark.asyncio
    async def test_root_text(self):
        server = HealthCheckServer("127.0.0.1", 0)

        response = await server.root_handler(MagicMock())

        assert response.status == 200
        assert response.text == "🤖 Discord Bot is running!"

    @pytest.mark.asyncio
    async def test_ping_reports_uptime(self):
        server = HealthCheckServer("127.0.0.1", 0)

        with patch.object(HealthCheckServer, "get_uptime", return_value=12.5):
            response = await server.ping_handler(MagicMock())

        assert response.status == 200
        assert json.loads(response.text) == {"status": "alive", "uptime": 12.5}

    def test_uptime_non_negative(self):
        assert HealthCheckServer.get_uptime() >= 0.0

    def test_routes_registered(self):
        server = HealthCheckServer("127.0.0.1", 0)
        paths = {route.resource.canonical for route in server.app.router.routes()}
        assert {"/", "/ping"} <= paths

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        await HealthCheckServer("127.0.0.1", 0).stop()
