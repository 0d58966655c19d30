from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional, Tuple

from .exceptions import WordlistError
from .scoring import WORD_LENGTH, is_word

logger = logging.getLogger(__name__)

DEFAULT_WORDLIST_PATH = "word-list-5.txt"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Wordlist:
    """The valid five-letter words of one game, in file order.

    Supports ``in`` for guess validation and keeps the order for solution
    selection and for automated players that walk the list.
    """

    path: str
    words: Tuple[str, ...]
    _index: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", frozenset(self.words))

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    # PUBLIC_INTERFACE
    def choose_solution(self, solution: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
        """Return the requested solution, or a random word when none is given.

        Raises:
            WordlistError: if the requested solution is not in the list.
        """
        if solution is not None:
            if solution not in self:
                raise WordlistError(f"Invalid solution: {solution!r} is not in {self.path}")
            return solution
        return (rng or random).choice(self.words)


# PUBLIC_INTERFACE
def load_wordlist(path: str) -> Wordlist:
    """Load a wordlist file with one five-letter lowercase word per line.

    Raises:
        WordlistError: if the file cannot be read, holds a line that is not a
            five-letter lowercase word, or holds no words at all.
    """
    logger.debug("Loading wordlist from %s", path)
    words = []
    try:
        with open(path, "r", encoding="ascii") as fh:
            for lineno, line in enumerate(fh, start=1):
                word = line.rstrip("\r\n")
                if len(word) != WORD_LENGTH:
                    raise WordlistError(f"{path}:{lineno}: invalid word length in {word!r}")
                if not is_word(word):
                    raise WordlistError(f"{path}:{lineno}: invalid word {word!r}")
                words.append(word)
    except (OSError, UnicodeDecodeError) as exc:
        raise WordlistError(f"Could not load wordlist {path}: {exc}") from exc
    if not words:
        raise WordlistError(f"Wordlist {path} is empty")
    return Wordlist(path=path, words=tuple(words))
