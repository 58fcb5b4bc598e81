"""Data models for the chord sheet editor.

Lines and placements are immutable; edits build new instances so a
reader never observes a half-applied update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EditorMode(str, Enum):
    """Which representation of the lyrics is authoritative.

    The values are the persisted spellings.
    """

    LYRICS = "lyrics"
    PLACEMENT = "chords"


@dataclass(frozen=True)
class ChordPlacement:
    """A chord stamped at a horizontal position above a lyric line.

    Parameters
    ----------
    id : int
        Identifier, unique within the document and increasing in
        creation order.
    text : str
        The chord name as rendered (e.g., "Am"). Transposition rewrites it.
    offset : float
        Pixels from the left edge of the line.
    """

    id: int
    text: str
    offset: float


@dataclass(frozen=True)
class Line:
    """One lyric line with the chords placed above it.

    Parameters
    ----------
    id : int
        Line identifier, equal to its index when lyrics were locked.
    text : str
        The lyric text (may be empty).
    chords : tuple[ChordPlacement, ...]
        Placements in insertion order.

    Examples
    --------
    >>> line = Line(id=0, text="Hello world")
    >>> line.chords
    ()
    """

    id: int
    text: str
    chords: tuple[ChordPlacement, ...] = field(default=())

    def with_chord(self, placement: ChordPlacement) -> Line:
        """Return a copy with ``placement`` appended."""
        return Line(id=self.id, text=self.text, chords=(*self.chords, placement))

    def without_chord(self, placement_id: int) -> Line:
        """Return a copy with the placement ``placement_id`` removed."""
        return Line(
            id=self.id,
            text=self.text,
            chords=tuple(c for c in self.chords if c.id != placement_id),
        )
