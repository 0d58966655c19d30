from __future__ import annotations

import enum
from typing import List, Tuple

WORD_LENGTH = 5


# PUBLIC_INTERFACE
class LetterScore(enum.Enum):
    """Per-letter verdict for one slot of a guess."""

    HERE = "here"
    SOMEWHERE = "somewhere"
    NOWHERE = "nowhere"


FeedbackVector = Tuple[LetterScore, LetterScore, LetterScore, LetterScore, LetterScore]


def is_word(value: str) -> bool:
    """True when value is exactly five ASCII lowercase letters."""
    return (
        isinstance(value, str)
        and len(value) == WORD_LENGTH
        and value.isascii()
        and value.isalpha()
        and value.islower()
    )


def _check_word(name: str, value: str) -> None:
    if not is_word(value):
        raise ValueError(f"{name} must be {WORD_LENGTH} ASCII lowercase letters, got {value!r}")


# PUBLIC_INTERFACE
def score(solution: str, guess: str) -> FeedbackVector:
    """Score a guess against the solution.

    - HERE: letter matches the solution at the same position
    - SOMEWHERE: letter occurs at another solution position not yet claimed
    - NOWHERE: no unclaimed solution position carries this letter

    Exact matches are claimed first. Remaining guess letters then claim the
    leftmost unclaimed solution occurrence, in guess order, so surplus copies
    of a letter score NOWHERE.

    Raises:
        ValueError: if either argument is not a five-letter lowercase word.
    """
    _check_word("solution", solution)
    _check_word("guess", guess)

    result: List[LetterScore] = [LetterScore.NOWHERE] * WORD_LENGTH
    consumed: List[bool] = [False] * WORD_LENGTH

    for i in range(WORD_LENGTH):
        if guess[i] == solution[i]:
            result[i] = LetterScore.HERE
            consumed[i] = True

    for i in range(WORD_LENGTH):
        if result[i] is LetterScore.HERE:
            continue
        for j in range(WORD_LENGTH):
            if not consumed[j] and solution[j] == guess[i]:
                result[i] = LetterScore.SOMEWHERE
                consumed[j] = True
                break

    return tuple(result)


# PUBLIC_INTERFACE
def is_solved(feedback: FeedbackVector) -> bool:
    """Return True when every slot of the feedback is HERE."""
    return all(slot is LetterScore.HERE for slot in feedback)
