"""
Command Engine.

Interprets chat commands and decides what to reply, independent of Discord:

    raw text → classify() → CommandKind
    channel/guild names → resolve_defaults() → ContextDefaults
    text + kind + defaults → parse() → ResolvedParameters
    parameters + series listing → reply builder → Reply, Reply, ...

DispatchEngine wires these together for one message at a time.
"""

from irdiscordbot.engine.classifier import classify
from irdiscordbot.engine.context import resolve_defaults
from irdiscordbot.engine.dispatch import ContextLookup, DispatchEngine, ReplySender
from irdiscordbot.engine.errors import (
    BotError,
    CatalogFetchError,
    ContextLookupError,
    InvalidWeekError,
    JokeFetchError,
    SendError,
)
from irdiscordbot.engine.models import (
    ChannelInfo,
    CommandKind,
    ContextDefaults,
    GuildInfo,
    InboundMessage,
    MessageContext,
    Reply,
    ResolvedParameters,
    Series,
)
from irdiscordbot.engine.parameters import parse, sanitize_week

__all__ = [
    "BotError",
    "CatalogFetchError",
    "ChannelInfo",
    "CommandKind",
    "ContextDefaults",
    "ContextLookup",
    "ContextLookupError",
    "DispatchEngine",
    "GuildInfo",
    "InboundMessage",
    "InvalidWeekError",
    "JokeFetchError",
    "MessageContext",
    "Reply",
    "ReplySender",
    "ResolvedParameters",
    "SendError",
    "Series",
    "classify",
    "parse",
    "resolve_defaults",
    "sanitize_week",
]
