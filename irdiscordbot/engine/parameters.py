"""
Command argument parsing.

Supported shapes (token 0 is the command word):

    !cmd                   -> defaults from channel/guild only
    !cmd ARG               -> series, or week when the channel already names one
    !cmd SERIES WEEK       -> both explicit, overriding the channel guess

Standings never take a week, so "!standings ARG" is always a series.
"""

import re

from irdiscordbot.engine.errors import InvalidWeekError
from irdiscordbot.engine.models import CommandKind, ContextDefaults, ResolvedParameters

MIN_WEEK = 1
MAX_WEEK = 13

_NON_DIGITS_RE = re.compile(r"[^0-9]+")


def sanitize_week(token: str) -> str:
    """
    Strip everything but digits from a week argument and range-check it.

    "wk.7!" becomes "7". The result is normalized, so "07" also becomes
    "7" and titles and image URLs always carry the same week form.

    Raises:
        InvalidWeekError: nothing numeric is left, or the week is outside 1..13
    """
    # Length check first: int() refuses very long digit strings
    digits = _NON_DIGITS_RE.sub("", token).lstrip("0")
    if not digits or len(digits) > len(str(MAX_WEEK)):
        raise InvalidWeekError(token)
    week = int(digits)
    if not MIN_WEEK <= week <= MAX_WEEK:
        raise InvalidWeekError(token)
    return str(week)


def parse(raw_content: str, kind: CommandKind, defaults: ContextDefaults) -> ResolvedParameters:
    """
    Merge explicit arguments with the channel/guild defaults.

    Args:
        raw_content: Full message text, command word included
        kind: Classified command
        defaults: Series/team guessed from the message's channel and guild

    Returns:
        ResolvedParameters with a validated week filter

    Raises:
        InvalidWeekError: the week argument is not a week number
    """
    # Single spaces on purpose: "!stats  4" is three tokens, one of them empty
    params = raw_content.split(" ")
    series = defaults.series_guess
    week = ""

    if len(params) == 2:
        if series and kind is not CommandKind.STANDINGS:
            week = params[1]
        else:
            series = params[1]
    elif len(params) == 3:
        series = params[1]
        week = params[2]

    if week:
        week = sanitize_week(week)

    return ResolvedParameters(
        team_filter=defaults.team_guess,
        week_filter=week,
        series_filter=series,
    )
