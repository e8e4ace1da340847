"""
Tests for CommandsCog and its Discord adapters.

Covers:
- to_embed conversion (pure, no Discord connection)
- DiscordContextLookup: cache hits, REST fallback, error translation
- ChannelReplySender: text vs embed, error translation
- on_message gating and hand-off to the engine
"""

from __future__ import annotations

import pytest
from unittest.mock import AsyncMock, MagicMock

import discord

from irdiscordbot.bot.cogs.commands import (
    ChannelReplySender,
    CommandsCog,
    DiscordContextLookup,
    to_embed,
)
from irdiscordbot.engine import ContextLookupError, InboundMessage, Reply, SendError


def _http_exception(status: int = 403) -> discord.HTTPException:
    response = MagicMock()
    response.status = status
    response.reason = "Forbidden"
    return discord.Forbidden(response, "Missing Access")


# ---------------------------------------------------------------------------
# to_embed
# ---------------------------------------------------------------------------

class TestToEmbed:
    def test_image_embed(self):
        reply = Reply(title="Radical - Standings", description="desc", image_url="https://x/standings.png")
        embed = to_embed(reply)
        assert embed.title == "Radical - Standings"
        assert embed.description == "desc"
        assert embed.image.url == "https://x/standings.png"
        assert embed.type == "image"

    def test_untitled_image_embed(self):
        embed = to_embed(Reply(image_url="https://x/laps.png"))
        assert embed.title is None
        assert embed.image.url == "https://x/laps.png"

    def test_text_only_embed(self):
        embed = to_embed(Reply(title="Joke", description="Een grap"))
        assert embed.type == "rich"
        assert embed.image.url is None


# ---------------------------------------------------------------------------
# DiscordContextLookup
# ---------------------------------------------------------------------------

class TestContextLookup:
    @pytest.mark.asyncio
    async def test_cached_channel(self):
        channel = MagicMock()
        channel.name = "radical-eu"
        channel.guild.id = 42
        client = MagicMock()
        client.get_channel.return_value = channel
        client.fetch_channel = AsyncMock()

        info = await DiscordContextLookup(client).channel(7)

        assert info.name == "radical-eu"
        assert info.guild_id == 42
        client.fetch_channel.assert_not_called()

    @pytest.mark.asyncio
    async def test_channel_falls_back_to_fetch(self):
        channel = MagicMock()
        channel.name = "indy"
        channel.guild.id = 42
        client = MagicMock()
        client.get_channel.return_value = None
        client.fetch_channel = AsyncMock(return_value=channel)

        info = await DiscordContextLookup(client).channel(7)

        assert info.name == "indy"
        client.fetch_channel.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_channel_fetch_error_is_translated(self):
        client = MagicMock()
        client.get_channel.return_value = None
        client.fetch_channel = AsyncMock(side_effect=_http_exception())

        with pytest.raises(ContextLookupError):
            await DiscordContextLookup(client).channel(7)

    @pytest.mark.asyncio
    async def test_guild_lookup(self):
        guild = MagicMock()
        guild.name = "Team Orange"
        client = MagicMock()
        client.get_guild.return_value = None
        client.fetch_guild = AsyncMock(return_value=guild)

        info = await DiscordContextLookup(client).guild(42)

        assert info.name == "Team Orange"

    @pytest.mark.asyncio
    async def test_channel_without_guild_cannot_resolve_guild(self):
        with pytest.raises(ContextLookupError):
            await DiscordContextLookup(MagicMock()).guild(None)

    @pytest.mark.asyncio
    async def test_guild_fetch_error_is_translated(self):
        client = MagicMock()
        client.get_guild.return_value = None
        client.fetch_guild = AsyncMock(side_effect=_http_exception())

        with pytest.raises(ContextLookupError):
            await DiscordContextLookup(client).guild(42)


# ---------------------------------------------------------------------------
# ChannelReplySender
# ---------------------------------------------------------------------------

class TestReplySender:
    @pytest.mark.asyncio
    async def test_text_reply(self):
        channel = MagicMock()
        channel.send = AsyncMock()
        await ChannelReplySender(channel).send(Reply.text("Invalid week number given: 20"))
        channel.send.assert_awaited_once_with(content="Invalid week number given: 20")

    @pytest.mark.asyncio
    async def test_embed_reply(self):
        channel = MagicMock()
        channel.send = AsyncMock()
        await ChannelReplySender(channel).send(Reply(title="T", image_url="https://x/a.png"))
        embed = channel.send.call_args.kwargs["embed"]
        assert isinstance(embed, discord.Embed)
        assert embed.title == "T"

    @pytest.mark.asyncio
    async def test_http_error_is_translated(self):
        channel = MagicMock()
        channel.send = AsyncMock(side_effect=_http_exception())
        with pytest.raises(SendError):
            await ChannelReplySender(channel).send(Reply.text("hi"))


# ---------------------------------------------------------------------------
# on_message
# ---------------------------------------------------------------------------

def _make_bot(allowed=True):
    bot = MagicMock()
    bot.is_allowed_channel.return_value = allowed
    bot.user = MagicMock()
    bot.user.id = 1
    bot.engine = MagicMock()
    bot.engine.handle = AsyncMock()
    return bot


def _make_message(content="!standings", author_id=2, channel_id=100):
    msg = MagicMock(spec=discord.Message)
    msg.content = content
    msg.author = MagicMock()
    msg.author.id = author_id
    msg.channel = MagicMock()
    msg.channel.id = channel_id
    return msg


class TestOnMessage:
    @pytest.mark.asyncio
    async def test_message_is_handed_to_engine(self):
        bot = _make_bot()
        cog = CommandsCog(bot)
        message = _make_message("!stats radical 4")

        await cog.on_message(message)

        bot.engine.handle.assert_awaited_once()
        inbound, lookup, sender = bot.engine.handle.call_args.args
        assert inbound == InboundMessage(content="!stats radical 4", channel_id=100, author_id=2, bot_id=1)
        assert isinstance(lookup, DiscordContextLookup)
        assert isinstance(sender, ChannelReplySender)
        assert sender.channel is message.channel

    @pytest.mark.asyncio
    async def test_blocked_channel_is_ignored(self):
        bot = _make_bot(allowed=False)
        await CommandsCog(bot).on_message(_make_message())
        bot.engine.handle.assert_not_called()

    @pytest.mark.asyncio
    async def test_nothing_happens_before_engine_is_ready(self):
        bot = _make_bot()
        handle = bot.engine.handle
        bot.engine = None
        await CommandsCog(bot).on_message(_make_message())
        handle.assert_not_called()
