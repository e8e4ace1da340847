"""
IRacingBot - discord.py bot client.

Manages the full bot lifecycle:
- Opens the shared HTTP client for the visualizer/joke APIs once at startup
- Builds the command DispatchEngine on top of it
- Loads the CommandsCog that feeds chat messages into the engine
- Starts the /health endpoint
- Cleans up all resources on shutdown via AsyncExitStack
"""

from __future__ import annotations

from contextlib import AsyncExitStack

import discord
from discord.ext import commands

from irdiscordbot.clients import VisualizerClient
from irdiscordbot.config.logging import get_logger
from irdiscordbot.config.settings import Settings
from irdiscordbot.engine import DispatchEngine
from irdiscordbot.health import start_health_server

logger = get_logger(__name__)


class IRacingBot(commands.Bot):
    """
    Discord bot answering iRacing league commands.

    Commands are plain "!word" messages handled by CommandsCog rather than
    discord.py's command framework, so the framework prefix is set to
    mentions only and never collides with them.

    Args:
        settings: Full application settings (bot token, API URLs, health server)
    """

    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        intents.message_content = True  # Commands are read from message text
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
        )
        self.settings = settings
        self.engine: DispatchEngine | None = None
        self._exit_stack = AsyncExitStack()

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Initializes the API client and engine, loads cogs and starts the
        health endpoint.
        """
        api = await self._exit_stack.enter_async_context(VisualizerClient(self.settings.api))
        self.engine = DispatchEngine(
            api.fetch_series,
            api.fetch_joke,
            base_url=self.settings.api.visualizer_url,
        )
        logger.info(f"Command engine ready (visualizer: {self.settings.api.visualizer_url})")

        from irdiscordbot.bot.cogs.commands import CommandsCog
        await self.add_cog(CommandsCog(self))
        logger.info("Cogs loaded")

        if self.settings.health.enabled:
            runner = await start_health_server(self.settings.health, lambda: self.latency)
            self._exit_stack.push_async_callback(runner.cleanup)

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def close(self) -> None:
        """Graceful shutdown - clean up all async resources before disconnecting."""
        logger.info(f"Shutting down {self.settings.bot.name}...")
        await self._exit_stack.aclose()
        await super().close()

    def is_allowed_channel(self, channel_id: int) -> bool:
        """
        Return True if the bot should respond in this channel.

        If `allowed_channel_ids` is empty (the default), the bot responds everywhere.
        If it's non-empty, the bot only responds in the listed channel IDs.
        """
        allowed = self.settings.bot.allowed_channel_ids
        return not allowed or channel_id in allowed
