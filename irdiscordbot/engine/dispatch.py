"""
DispatchEngine - runs one chat message through the command pipeline.

    classify → (joke: fetch joke → reply)
             → look up channel/guild → guess defaults → parse arguments
             → fetch series listing → build replies → send them in order

Every failure ends handling of the message. The only failure the user
ever sees is an invalid week number; everything else is logged.

The engine keeps no state between messages. Chat-platform access comes in
through the `lookup` and `sender` arguments of handle(); remote data comes
in through the two fetch callables given at construction.
"""

from __future__ import annotations

import random
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

from irdiscordbot.config.logging import get_logger
from irdiscordbot.engine.classifier import classify
from irdiscordbot.engine.context import resolve_defaults
from irdiscordbot.engine.errors import (
    CatalogFetchError,
    ContextLookupError,
    InvalidWeekError,
    JokeFetchError,
    SendError,
)
from irdiscordbot.engine.models import (
    ChannelInfo,
    CommandKind,
    GuildInfo,
    InboundMessage,
    MessageContext,
    Reply,
    Series,
)
from irdiscordbot.engine.parameters import parse
from irdiscordbot.engine.replies import BUILDERS, ImageURLs, build_joke

logger = get_logger(__name__)

SeriesFetcher = Callable[[], Awaitable[list[Series]]]
JokeFetcher = Callable[[str], Awaitable[str]]

JOKE_TYPES = ("xxx", "nl")


class ContextLookup(Protocol):
    """Channel and guild metadata lookups. Both raise ContextLookupError."""

    async def channel(self, channel_id: int) -> ChannelInfo: ...

    async def guild(self, guild_id: int | None) -> GuildInfo: ...


class ReplySender(Protocol):
    """Delivers one reply to the channel a message came from. Raises SendError."""

    async def send(self, reply: Reply) -> None: ...


class DispatchEngine:
    """
    Turns a chat message into replies.

    Args:
        fetch_series: Returns the current series listing
        fetch_joke: Returns a joke of the given type ("xxx" or "nl")
        base_url: Visualizer base URL used for image links
        clock: Seconds since the epoch, used for cache-busting image URLs
        rng: Picks the joke type
    """

    def __init__(
        self,
        fetch_series: SeriesFetcher,
        fetch_joke: JokeFetcher,
        *,
        base_url: str,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ):
        self._fetch_series = fetch_series
        self._fetch_joke = fetch_joke
        self._urls = ImageURLs(base_url, clock)
        self._rng = rng or random.Random()

    async def handle(
        self, message: InboundMessage, lookup: ContextLookup, sender: ReplySender
    ) -> None:
        """Handle one message. Never raises for the failures listed in engine.errors."""
        if message.is_self_authored:
            return

        kind = classify(message.content)
        if kind is CommandKind.UNRECOGNIZED:
            return

        if kind is CommandKind.DUTCH_JOKE:
            await self._tell_joke(sender)
            return

        try:
            context = await self.resolve_context(message, lookup)
        except ContextLookupError as e:
            logger.error(f"error looking up message context: {e}")
            return

        defaults = resolve_defaults(context.channel_name, context.guild_name)
        try:
            params = parse(context.raw_content, kind, defaults)
        except InvalidWeekError as e:
            logger.info(f"rejected week {e.token!r} in {context.raw_content!r}")
            await self._send_all(sender, [Reply.text(str(e))])
            return

        try:
            catalog = await self._fetch_series()
        except CatalogFetchError as e:
            logger.error(f"error querying series data: {e}")
            return

        logger.debug(f"{kind.value}: {params!r} over {len(catalog)} series")
        await self._send_all(sender, BUILDERS[kind](params, catalog, self._urls))

    async def resolve_context(
        self, message: InboundMessage, lookup: ContextLookup
    ) -> MessageContext:
        """Look up the channel, then its guild, and bundle their names with the message."""
        channel = await lookup.channel(message.channel_id)
        guild = await lookup.guild(channel.guild_id)
        return MessageContext(
            raw_content=message.content,
            channel_name=channel.name,
            guild_name=guild.name,
            author_id=message.author_id,
            bot_id=message.bot_id,
        )

    def pick_joke_type(self) -> str:
        return self._rng.choice(JOKE_TYPES)

    async def _tell_joke(self, sender: ReplySender) -> None:
        try:
            joke = await self._fetch_joke(self.pick_joke_type())
        except JokeFetchError as e:
            logger.error(f"error retrieving joke: {e}")
            return
        if not joke:
            logger.error("error retrieving joke: empty joke")
            return
        await self._send_all(sender, [build_joke(joke)])

    async def _send_all(self, sender: ReplySender, replies) -> None:
        # Stop at the first failed send; later replies are never built
        for reply in replies:
            try:
                await sender.send(reply)
            except SendError as e:
                logger.error(f"error sending message: {e}")
                return
