"""
Health endpoint.

Serves GET /health next to the bot so a container platform can restart it
when the Discord gateway connection goes stale:

    200 {"status": "ok"}       heartbeat latency within limits
    500 {"status": "failed"}   latency too high, or no heartbeat yet
"""

from __future__ import annotations

import math
from collections.abc import Callable

from aiohttp import web

from irdiscordbot.config.logging import get_logger
from irdiscordbot.config.settings import HealthSettings

logger = get_logger(__name__)


def is_healthy(latency: float | None, max_latency: float) -> bool:
    """discord.py reports an unknown latency as inf (or nan before the first beat)."""
    if latency is None or math.isnan(latency) or math.isinf(latency):
        return False
    return latency <= max_latency


def create_app(latency: Callable[[], float | None], max_latency: float) -> web.Application:
    """
    Build the health application.

    Args:
        latency: Returns the current heartbeat latency in seconds
        max_latency: Highest latency still reported as healthy
    """

    async def check_health(_request: web.Request) -> web.Response:
        if not is_healthy(latency(), max_latency):
            return web.json_response({"status": "failed"}, status=500)
        return web.json_response({"status": "ok"})

    app = web.Application()
    app.router.add_get("/health", check_health)
    return app


async def start_health_server(
    settings: HealthSettings, latency: Callable[[], float | None]
) -> web.AppRunner:
    """Start serving /health in the running event loop. Caller must cleanup() the runner."""
    runner = web.AppRunner(create_app(latency, settings.max_latency_seconds))
    await runner.setup()
    site = web.TCPSite(runner, host=settings.host, port=settings.port)
    await site.start()
    logger.info(f"Health endpoint listening on {settings.host}:{settings.port}/health")
    return runner
