"""
CommandsCog - "!summary", "!standings", "!stats" and "!joke" chat commands.

Listens to every message the bot can see and hands it to the bot's
DispatchEngine together with two small adapters:

  - DiscordContextLookup: channel and guild names via the client cache,
    falling back to the REST API
  - ChannelReplySender: posts engine replies as text or image embeds

Discord errors are translated into the engine's error types here, so the
engine never has to know about discord.py.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from irdiscordbot.config.logging import get_logger
from irdiscordbot.engine import (
    ChannelInfo,
    ContextLookupError,
    GuildInfo,
    InboundMessage,
    Reply,
    SendError,
)

logger = get_logger(__name__)


def to_embed(reply: Reply) -> discord.Embed:
    """Convert an embed reply into a discord.Embed with the image attached."""
    embed = discord.Embed(
        title=reply.title,
        description=reply.description,
        type="image" if reply.image_url else "rich",
    )
    if reply.image_url:
        embed.set_image(url=reply.image_url)
    return embed


class DiscordContextLookup:
    """Looks up channel and guild names for the engine."""

    def __init__(self, client: discord.Client) -> None:
        self.client = client

    async def channel(self, channel_id: int) -> ChannelInfo:
        try:
            channel = self.client.get_channel(channel_id) or await self.client.fetch_channel(channel_id)
        except (discord.HTTPException, discord.InvalidData) as e:
            raise ContextLookupError(f"error getting channel {channel_id}: {e}") from e

        guild = getattr(channel, "guild", None)
        return ChannelInfo(
            name=getattr(channel, "name", None) or "",
            guild_id=guild.id if guild is not None else None,
        )

    async def guild(self, guild_id: int | None) -> GuildInfo:
        if guild_id is None:
            raise ContextLookupError("channel does not belong to a guild")
        try:
            guild = self.client.get_guild(guild_id) or await self.client.fetch_guild(guild_id)
        except discord.HTTPException as e:
            raise ContextLookupError(f"error getting guild {guild_id}: {e}") from e
        return GuildInfo(name=guild.name)


class ChannelReplySender:
    """Sends engine replies to one channel."""

    def __init__(self, channel: discord.abc.Messageable) -> None:
        self.channel = channel

    async def send(self, reply: Reply) -> None:
        try:
            if reply.is_embed:
                await self.channel.send(embed=to_embed(reply))
            else:
                await self.channel.send(content=reply.content)
        except discord.HTTPException as e:
            raise SendError(str(e)) from e


class CommandsCog(commands.Cog):
    """Routes chat messages through the command engine."""

    def __init__(self, bot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        """
        Handle a possible "!command" message.

        Ignores messages in non-allowed channels (if restriction is configured).
        Everything else, including the bot's own messages, goes to the engine,
        which decides whether the message is a command at all.
        """
        if self.bot.engine is None:
            return
        if not self.bot.is_allowed_channel(message.channel.id):
            return

        inbound = InboundMessage(
            content=message.content,
            channel_id=message.channel.id,
            author_id=message.author.id,
            bot_id=self.bot.user.id if self.bot.user else None,
        )
        await self.bot.engine.handle(
            inbound,
            DiscordContextLookup(self.bot),
            ChannelReplySender(message.channel),
        )
