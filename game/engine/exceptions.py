"""Errors raised by the game engine and its collaborators."""


class GameError(Exception):
    """Base class for every recoverable failure the engine reports."""


class WordlistError(GameError):
    """The wordlist could not be read, is malformed, or lacks the requested word."""


class ChannelError(GameError):
    """A guesser channel operation failed."""


class GuessReadError(ChannelError):
    """A guess line could not be read from the guesser."""


class FeedbackDeliveryError(ChannelError):
    """Feedback could not be written to the guesser."""


class PlayerSpawnError(ChannelError):
    """The automated player program could not be started."""


class PlayerTerminationError(ChannelError):
    """The automated player program could not be killed or reaped."""
