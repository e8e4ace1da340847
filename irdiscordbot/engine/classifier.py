"""
Command classification by message prefix.
"""

from irdiscordbot.engine.models import CommandKind

# Checked top to bottom, first prefix hit wins. Note "!stats" is a prefix
# of "!statistics" so both land on STATISTICS either way.
COMMAND_PREFIXES: list[tuple[tuple[str, ...], CommandKind]] = [
    (("!martijn", "!anne", "!erwin", "!dutch", "!joke"), CommandKind.DUTCH_JOKE),
    (("!summary", "!drivers"), CommandKind.SUMMARY),
    (("!standings", "!rankings"), CommandKind.STANDINGS),
    (("!stats", "!statistics"), CommandKind.STATISTICS),
]


def classify(raw_content: str) -> CommandKind:
    """
    Return the command a message asks for.

    Matching is a case-insensitive prefix test, so "!Stats radical" and
    "!standingsplease" are both recognized. Anything else is UNRECOGNIZED.
    """
    content = raw_content.lower()
    for prefixes, kind in COMMAND_PREFIXES:
        if content.startswith(prefixes):
            return kind
    return CommandKind.UNRECOGNIZED
