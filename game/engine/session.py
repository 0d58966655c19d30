from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Container, Optional

from .channels import GuesserChannel
from .exceptions import GuessReadError
from .scoring import is_solved, score

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class SessionState(enum.Enum):
    PLAYING = "PLAYING"
    WON = "WON"
    INVALID_GUESS = "INVALID_GUESS"
    STREAM_ENDED = "STREAM_ENDED"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class SessionResult:
    """How a session ended.

    Fields:
    - state: the terminal state reached
    - turns: guesses scored, counting the winning one
    - guess: the winning or rejected guess, None when the stream ended
    """
    state: SessionState
    turns: int
    guess: Optional[str] = None

    @property
    def is_won(self) -> bool:
        return self.state is SessionState.WON


# PUBLIC_INTERFACE
@dataclass
class Session:
    """One game: a fixed solution played against one guesser channel.

    The wordlist only needs to support ``in``; the channel is owned by the
    caller, who closes it when the session returns or raises.
    """
    solution: str
    wordlist: Container[str]
    channel: GuesserChannel
    hard_mode: bool = False
    turn: int = field(default=1, init=False)
    state: SessionState = field(default=SessionState.PLAYING, init=False)

    def _finish(self, state: SessionState, turns: int, guess: Optional[str] = None) -> SessionResult:
        self.state = state
        return SessionResult(state=state, turns=turns, guess=guess)

    # PUBLIC_INTERFACE
    def play(self) -> SessionResult:
        """Run turns until the guesser wins, sends an unknown word, or stops.

        Returns:
            SessionResult with WON (turns is the guess count), INVALID_GUESS
            (guess is the offending word) or STREAM_ENDED.

        Raises:
            FeedbackDeliveryError: if feedback for a read guess cannot be written.
        """
        if self.state is not SessionState.PLAYING:
            raise RuntimeError(f"Session already finished: {self.state.value}")

        while True:
            try:
                guess = self.channel.read_guess()
            except GuessReadError as exc:
                logger.warning("Guesser input failed, ending session: %s", exc)
                guess = None
            if guess is None:
                logger.debug("Guesser input ended after %d turn(s)", self.turn - 1)
                return self._finish(SessionState.STREAM_ENDED, self.turn - 1)

            logger.debug('Guess: "%s"', guess)
            if guess not in self.wordlist:
                return self._finish(SessionState.INVALID_GUESS, self.turn, guess)

            feedback = score(self.solution, guess)
            self.channel.write_feedback(feedback)

            if is_solved(feedback):
                return self._finish(SessionState.WON, self.turn, guess)
            self.turn += 1
