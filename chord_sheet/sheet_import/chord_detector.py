"""Chord detection and line classification for plain-text sheets.

A regex rejects obvious non-chords cheaply; pychord has the final say.
"""

from __future__ import annotations

import re

from pychord import Chord as PyChord

from chord_sheet.sheet_import.models import LineKind, Token
from chord_sheet.sheet_import.tokenizer import tokenize_line

MAX_CHORD_LENGTH = 15
CHORD_LINE_THRESHOLD = 0.6

# Root (A-G), optional accidental, optional quality, optional slash bass
CHORD_RE = re.compile(
    r"^[A-G][b#]?"
    r"(?:"
    r"m(?:aj)?(?:7|9|11|13)?|"  # m, maj, maj7, m7, m9, ...
    r"M(?:aj)?(?:7|9|11|13)?|"  # M, Maj, M7, ...
    r"dim(?:7)?|"
    r"aug(?:7)?|"
    r"sus[24]?(?:7)?|"
    r"add[29]|"
    r"[679]|"
    r"11|13|"
    r"m7-5|m7b5|"
    r"mM7|mmaj7|"
    r"5"
    r")*"
    r"(?:/[A-G][b#]?)?$",
)


def is_chord(text: str) -> bool:
    """Check whether a token is a chord name.

    Examples
    --------
    >>> is_chord("F#m7")
    True
    >>> is_chord("Hello")
    False
    >>> is_chord("C/E")
    True
    """
    if not text or len(text) > MAX_CHORD_LENGTH:
        return False
    if not CHORD_RE.match(text):
        return False

    try:
        PyChord(text)
    except ValueError:
        return False
    return True


def classify_token(token: Token) -> Token:
    """Return a copy of ``token`` with its kind set.

    Examples
    --------
    >>> classify_token(Token(text="Gm7", start=0, end=3, kind="other")).kind
    'chord'
    """
    text = token.text
    if is_chord(text):
        kind = "chord"
    elif all(not c.isalnum() for c in text):
        kind = "punct"
    elif any(c.isalpha() for c in text):
        kind = "word"
    else:
        return token
    return Token(text=text, start=token.start, end=token.end, kind=kind)


def classify_tokens(tokens: list[Token]) -> list[Token]:
    return [classify_token(t) for t in tokens]


def classify_line(line: str, tokens: list[Token] | None = None) -> LineKind:
    """Classify a line as a chord line, a lyric line or empty.

    A chord line has at least 60% chord tokens and no words.

    Examples
    --------
    >>> classify_line("")
    'empty'
    >>> classify_line("G    C   D")
    'chord'
    >>> classify_line("Hello world")
    'lyric'
    """
    if not line.strip():
        return "empty"

    if tokens is None:
        tokens = classify_tokens(tokenize_line(line))

    chord_count = sum(1 for t in tokens if t.kind == "chord")
    word_count = sum(1 for t in tokens if t.kind == "word")

    if chord_count and word_count == 0 and chord_count / len(tokens) >= CHORD_LINE_THRESHOLD:
        return "chord"
    return "lyric"
