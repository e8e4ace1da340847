"""
Default series and team derived from where a message was posted.

League servers name their channels after the series they race
("radical-racing-eu", "indy-pro-chat", ...) and the server itself after
the team, so both can stand in for arguments the user left out.
"""

from urllib.parse import quote_plus

from irdiscordbot.config.logging import get_logger
from irdiscordbot.engine.models import ContextDefaults

logger = get_logger(__name__)

# Ordered: first substring found in the lowercased channel name wins.
CHANNEL_SERIES_HINTS: list[tuple[str, str]] = [
    ("adical", "Radical"),
    ("indy", "Indy Pro"),
    ("fr20", "Formula Renault 2.0"),
    ("fr35", "Formula 3.5"),
    ("f3", "F3 Championship"),
    ("ir04", "Formula iR-04"),
    ("1600", "Formula 1600"),
    ("sf23", "Super Formula"),
]


def guess_series(channel_name: str) -> str:
    """Return the series hinted at by a channel name, or "" if there is none."""
    name = channel_name.lower()
    for hint, series in CHANNEL_SERIES_HINTS:
        if hint in name:
            return series
    return ""


def resolve_defaults(channel_name: str, guild_name: str) -> ContextDefaults:
    """
    Guess series from the channel name and team from the guild name.

    The team is query-escaped so it can be dropped straight into an image
    URL; it is not checked against anything.
    """
    series_guess = guess_series(channel_name)
    if series_guess:
        logger.debug(f"found series name by channel lookup: {series_guess}")
    return ContextDefaults(series_guess=series_guess, team_guess=quote_plus(guild_name))
