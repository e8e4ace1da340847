"""
Errors raised while handling a single chat command.

All of them are terminal for the message being handled. Only
InvalidWeekError is ever shown to the user; the others are logged.
"""


class BotError(Exception):
    """Base class for command handling failures."""


class ContextLookupError(BotError):
    """The channel or guild a message was posted in could not be looked up."""


class CatalogFetchError(BotError):
    """The series listing could not be fetched or parsed."""


class JokeFetchError(BotError):
    """The joke service could not be reached or returned garbage."""


class InvalidWeekError(BotError):
    """A week argument was not a number between 1 and 13."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid week number given: {token}")


class SendError(BotError):
    """A reply could not be delivered to the chat platform."""
