"""
Guesser channels: where guesses come from and where feedback goes.

A channel is either a human at a terminal (InteractiveChannel) or an
automated player program spawned as a child process (ProcessChannel). Both
speak the same line protocol: one guess line in, one glyph line out, in
strict alternation. Channels are context managers; leaving the ``with``
block releases whatever the channel owns.
"""

from __future__ import annotations

import contextlib
import logging
import subprocess
import sys
from typing import IO, List, Optional, Protocol, Sequence, runtime_checkable

from .exceptions import (
    FeedbackDeliveryError,
    GuessReadError,
    PlayerSpawnError,
    PlayerTerminationError,
)
from .feedback import GlyphStyles, encode_feedback
from .scoring import FeedbackVector

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@runtime_checkable
class GuesserChannel(Protocol):
    """Minimal interface the session needs from a guesser."""

    def read_guess(self) -> Optional[str]:
        """Return the next guess, or None once the guesser has no more input."""
        ...

    def write_feedback(self, feedback: FeedbackVector) -> None: ...

    def close(self) -> None: ...


class _ChannelContext:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.close()
        except Exception:
            if exc is not None:
                logger.error("%s failed to close after: %r", type(self).__name__, exc)
            raise
        return False

    def close(self) -> None:
        pass


def _read_line(stream: IO[str]) -> Optional[str]:
    try:
        line = stream.readline()
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise GuessReadError(f"Could not read guess: {exc}") from exc
    if not line:
        return None
    return line.rstrip()


def _write_line(stream: IO[str], line: str) -> None:
    try:
        stream.write(line + "\n")
        stream.flush()
    except (OSError, ValueError) as exc:
        raise FeedbackDeliveryError(f"Could not deliver feedback: {exc}") from exc


# PUBLIC_INTERFACE
class InteractiveChannel(_ChannelContext):
    """A human typing guesses, one per line, and reading glyph feedback.

    Parameters:
        stdin: stream guesses are read from (default: sys.stdin).
        stdout: stream feedback is written to (default: sys.stdout). Django's
            OutputWrapper works here as well as a plain text stream.
        styles: optional per-score glyph decorators, e.g. terminal colours.
    """

    def __init__(self, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None,
                 styles: Optional[GlyphStyles] = None):
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._styles = styles

    def read_guess(self) -> Optional[str]:
        return _read_line(self._stdin)

    def write_feedback(self, feedback: FeedbackVector) -> None:
        _write_line(self._stdout, encode_feedback(feedback, self._styles))


def build_player_command(program: str, args: Sequence[str] = (), *, wordlist_path: str,
                         hard: bool = False, verbose: bool = False) -> List[str]:
    """Argument vector for a player: program, forwarded flags, then its own args."""
    argv = [program]
    if hard:
        argv.append("-H")
    if verbose:
        argv.append("-v")
    argv += ["-w", wordlist_path]
    argv += list(args)
    return argv


# PUBLIC_INTERFACE
class ProcessChannel(_ChannelContext):
    """An automated player running as a child process.

    The child is spawned on construction and exclusively owned by this
    channel. It writes one guess per line to its stdout and reads one
    feedback line per turn from its stdin. close() kills and reaps it; it is
    idempotent and runs from __exit__ on every way out of the ``with`` block.
    The Popen handle stays available as ``process`` after close, so callers
    can inspect the exit status.

    Raises:
        PlayerSpawnError: if the program cannot be started.
    """

    def __init__(self, program: str, args: Sequence[str] = (), *, wordlist_path: str,
                 hard: bool = False, verbose: bool = False):
        self.argv = build_player_command(program, args, wordlist_path=wordlist_path,
                                         hard=hard, verbose=verbose)
        logger.debug("Spawning player: %s", subprocess.list2cmdline(self.argv))
        try:
            self._process: Optional[subprocess.Popen] = subprocess.Popen(
                self.argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=None if verbose else subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                bufsize=1,
            )
        except (OSError, ValueError) as exc:
            raise PlayerSpawnError(f"Could not initialize program {program!r}: {exc}") from exc
        self.process = self._process

    @property
    def closed(self) -> bool:
        return self._process is None

    def _require_process(self) -> subprocess.Popen:
        if self._process is None:
            raise ValueError("I/O operation on a closed player channel")
        return self._process

    def read_guess(self) -> Optional[str]:
        return _read_line(self._require_process().stdout)

    def write_feedback(self, feedback: FeedbackVector) -> None:
        _write_line(self._require_process().stdin, encode_feedback(feedback))

    def close(self) -> None:
        """Kill the child if it is still running, close its pipes and reap it.

        Raises:
            PlayerTerminationError: if the child cannot be killed or waited for.
        """
        if self._process is None:
            return
        process, self._process = self._process, None
        try:
            if process.poll() is None:
                process.kill()
            process.stdout.close()
            # The child is gone; unflushed feedback has nowhere to go.
            with contextlib.suppress(BrokenPipeError):
                process.stdin.close()
            process.wait()
        except OSError as exc:
            raise PlayerTerminationError(f"Could not terminate player {process.pid}: {exc}") from exc
        logger.debug("Player %s exited with status %s", process.pid, process.returncode)


# PUBLIC_INTERFACE
def get_channel(program: Optional[Sequence[str]] = None, *, wordlist_path: str, hard: bool = False,
                verbose: bool = False, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None,
                styles: Optional[GlyphStyles] = None):
    """Pick the channel variant for a game.

    A non-empty program argv (executable followed by its extra arguments)
    spawns a ProcessChannel; otherwise the game is played interactively.

    Example:
        with get_channel(["./bot", "--fast"], wordlist_path="words.txt") as channel:
            guess = channel.read_guess()
    """
    if program:
        executable, *args = program
        return ProcessChannel(executable, args, wordlist_path=wordlist_path, hard=hard, verbose=verbose)
    return InteractiveChannel(stdin=stdin, stdout=stdout, styles=styles)
