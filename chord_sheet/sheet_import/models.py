"""Data models for plain-text chord sheet import."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TokenKind = Literal["chord", "word", "punct", "other"]

LineKind = Literal["chord", "lyric", "empty"]


@dataclass(frozen=True)
class Token:
    """A token with column span information.

    Parameters
    ----------
    text : str
        The token text content.
    start : int
        Inclusive start column (0-indexed).
    end : int
        Exclusive end column.
    kind : TokenKind
        The token classification.

    Examples
    --------
    >>> token = Token(text="Gm7", start=0, end=3, kind="chord")
    >>> token.start, token.end
    (0, 3)
    """

    text: str
    start: int
    end: int
    kind: TokenKind
