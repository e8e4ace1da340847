"""
Data structures passed between the stages of command handling.

- Series: one entry of the visualizer's series listing
- CommandKind: what a message asks for
- InboundMessage / ChannelInfo / GuildInfo: what the chat platform tells us
- MessageContext: message text plus the names of where it was posted
- ContextDefaults: series/team guessed from channel and guild names
- ResolvedParameters: final filters handed to a reply builder
- Reply: one outbound payload, plain text or embed
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Series(BaseModel):
    """
    A racing series with its currently running season.

    Field aliases match the JSON keys of the visualizer's /series_json listing.
    """

    id: int = Field(alias="series_id", description="Series id")
    name: str = Field(description="Series name, e.g. 'Radical Esports Cup'")
    current_season_name: str = Field(
        alias="current_season", description="Label of the running season"
    )
    current_season_id: int = Field(description="Id of the running season")
    current_week: int = Field(description="Week the running season is in")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def matches(self, series_filter: str) -> bool:
        """Case-insensitive substring match on the name; empty filter matches all."""
        return not series_filter or series_filter.lower() in self.name.lower()


class CommandKind(str, Enum):
    """Commands the bot understands."""

    SUMMARY = "Summary"
    STANDINGS = "Standings"
    STATISTICS = "Statistics"
    DUTCH_JOKE = "DutchJoke"
    UNRECOGNIZED = "Unrecognized"


class InboundMessage(BaseModel):
    """A chat message as delivered by the platform."""

    content: str
    channel_id: int
    author_id: int
    bot_id: int | None = Field(None, description="Id of the bot user receiving the message")

    model_config = ConfigDict(frozen=True)

    @property
    def is_self_authored(self) -> bool:
        return self.bot_id is not None and self.author_id == self.bot_id


class ChannelInfo(BaseModel):
    name: str
    guild_id: int | None = None

    model_config = ConfigDict(frozen=True)


class GuildInfo(BaseModel):
    name: str

    model_config = ConfigDict(frozen=True)


class MessageContext(BaseModel):
    """Read-only view of a message and the names of the channel/guild it came from."""

    raw_content: str
    channel_name: str
    guild_name: str
    author_id: int
    bot_id: int | None = None

    model_config = ConfigDict(frozen=True)


class ContextDefaults(BaseModel):
    """Series and team inferred from the channel and guild names."""

    series_guess: str = ""
    team_guess: str = ""

    model_config = ConfigDict(frozen=True)


class ResolvedParameters(BaseModel):
    """
    Filters a reply builder works with.

    team_filter is already URL query-escaped. week_filter is either empty
    or the decimal form of a week between 1 and 13.
    """

    team_filter: str = ""
    week_filter: str = Field("", pattern=r"^(|[1-9]|1[0-3])$")
    series_filter: str = ""

    model_config = ConfigDict(frozen=True)


class Reply(BaseModel):
    """
    One outbound message.

    A reply with `content` is sent as plain text; otherwise it is an embed
    built from title, description and image URL.
    """

    content: str | None = None
    title: str | None = None
    description: str | None = None
    image_url: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_embed(self) -> bool:
        return self.content is None

    @classmethod
    def text(cls, content: str) -> "Reply":
        return cls(content=content)
