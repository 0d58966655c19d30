"""
Word game engine.

Exports:
- score, is_solved and LetterScore for the scoring rules
- encode_feedback and decode_feedback for the glyph line protocol
- Wordlist and load_wordlist for word validation and solution selection
- InteractiveChannel, ProcessChannel and get_channel for guesser I/O
- Session, SessionState and SessionResult for the turn loop

These modules are framework-agnostic: the management command and the sample
player both build on them without Django needing to be configured.
"""

from .channels import GuesserChannel, InteractiveChannel, ProcessChannel, get_channel
from .exceptions import (
    ChannelError,
    FeedbackDeliveryError,
    GameError,
    GuessReadError,
    PlayerSpawnError,
    PlayerTerminationError,
    WordlistError,
)
from .feedback import GLYPHS, decode_feedback, encode_feedback
from .scoring import WORD_LENGTH, FeedbackVector, LetterScore, is_solved, is_word, score
from .session import Session, SessionResult, SessionState
from .wordlist import DEFAULT_WORDLIST_PATH, Wordlist, load_wordlist

__all__ = [
    "ChannelError",
    "DEFAULT_WORDLIST_PATH",
    "FeedbackDeliveryError",
    "FeedbackVector",
    "GLYPHS",
    "GameError",
    "GuessReadError",
    "GuesserChannel",
    "InteractiveChannel",
    "LetterScore",
    "PlayerSpawnError",
    "PlayerTerminationError",
    "ProcessChannel",
    "Session",
    "SessionResult",
    "SessionState",
    "WORD_LENGTH",
    "Wordlist",
    "WordlistError",
    "decode_feedback",
    "encode_feedback",
    "get_channel",
    "is_solved",
    "is_word",
    "load_wordlist",
    "score",
]
