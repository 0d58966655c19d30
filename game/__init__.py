"""
Game app package initializer.

Re-exports the engine entry points so callers can import from game directly,
e.g.:

    from game import score, Session, get_channel
"""

# PUBLIC_INTERFACE
from .engine import (
    InteractiveChannel,
    LetterScore,
    ProcessChannel,
    Session,
    SessionState,
    get_channel,
    load_wordlist,
    score,
)

__all__ = [
    "InteractiveChannel",
    "LetterScore",
    "ProcessChannel",
    "Session",
    "SessionState",
    "get_channel",
    "load_wordlist",
    "score",
]
