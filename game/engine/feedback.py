from __future__ import annotations

from typing import Callable, Dict, Optional

from .scoring import WORD_LENGTH, FeedbackVector, LetterScore

# Glyphs shared by the terminal display and the player wire protocol.
GLYPHS: Dict[LetterScore, str] = {
    LetterScore.HERE: "O",
    LetterScore.SOMEWHERE: "X",
    LetterScore.NOWHERE: " ",
}

_SCORES_BY_GLYPH: Dict[str, LetterScore] = {glyph: s for s, glyph in GLYPHS.items()}

GlyphStyles = Dict[LetterScore, Callable[[str], str]]


# PUBLIC_INTERFACE
def encode_feedback(feedback: FeedbackVector, styles: Optional[GlyphStyles] = None) -> str:
    """Render feedback as one glyph per slot, without a line terminator.

    styles optionally maps a LetterScore to a callable that decorates its
    glyph (e.g. terminal colours). Blank NOWHERE slots are never styled.
    """
    styles = styles or {}
    parts = []
    for slot in feedback:
        glyph = GLYPHS[slot]
        style = styles.get(slot)
        parts.append(style(glyph) if style and slot is not LetterScore.NOWHERE else glyph)
    return "".join(parts)


# PUBLIC_INTERFACE
def decode_feedback(line: str) -> FeedbackVector:
    """Parse a plain glyph line back into a feedback vector.

    Only the line terminator is removed: blanks are NOWHERE slots.

    Raises:
        ValueError: if the line is not five known glyphs.
    """
    glyphs = line.rstrip("\r\n")
    if len(glyphs) != WORD_LENGTH:
        raise ValueError(f"Feedback must be {WORD_LENGTH} glyphs, got {glyphs!r}")
    try:
        return tuple(_SCORES_BY_GLYPH[g] for g in glyphs)
    except KeyError as exc:
        raise ValueError(f"Unknown feedback glyph {exc.args[0]!r} in {glyphs!r}") from None
