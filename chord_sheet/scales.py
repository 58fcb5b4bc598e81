"""Diatonic and chromatic chord palettes.

Each scale type maps to a table of semitone intervals from the root and
the triad quality built on each degree.
"""

from __future__ import annotations

from typing import Literal

from chord_sheet.models import Chord
from chord_sheet.pitch_class import NOTES, note_to_pc, pc_to_note

ScaleType = Literal["major", "minor"]

SCALE_TYPES: tuple[ScaleType, ...] = ("major", "minor")

# Scale type to semitone intervals from root
SCALE_INTERVALS: dict[str, tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),  # natural minor
}

# Scale type to triad quality per degree
DEGREE_QUALITIES: dict[str, tuple[str, ...]] = {
    "major": ("maj", "min", "min", "maj", "maj", "min", "dim"),
    "minor": ("min", "dim", "maj", "min", "min", "maj", "maj"),
}


def diatonic_chords(root: str, scale_type: str = "major") -> tuple[Chord, ...]:
    """Build the seven diatonic triads of a scale.

    Parameters
    ----------
    root : str
        Scale root in sharp spelling (e.g., "C", "F#").
    scale_type : str
        "major" or "minor" (natural minor).

    Returns
    -------
    tuple[Chord, ...]
        Seven chords, one per scale degree, starting on the root.

    Raises
    ------
    ValueError
        If the root or scale type is not recognized.

    Examples
    --------
    >>> [c.name for c in diatonic_chords("C", "major")]
    ['C', 'Dm', 'Em', 'F', 'G', 'Am', 'Bdim']
    >>> [c.name for c in diatonic_chords("A", "minor")]
    ['Am', 'Bdim', 'C', 'Dm', 'Em', 'F', 'G']
    """
    if scale_type not in SCALE_INTERVALS:
        msg = f"Unknown scale type: {scale_type}"
        raise ValueError(msg)

    root_pc = note_to_pc(root)
    intervals = SCALE_INTERVALS[scale_type]
    qualities = DEGREE_QUALITIES[scale_type]

    return tuple(
        Chord(root=pc_to_note(root_pc + interval), quality=quality)
        for interval, quality in zip(intervals, qualities)
    )


def chromatic_chords() -> tuple[Chord, ...]:
    """Return the 24-chord palette: major then minor on every note.

    Examples
    --------
    >>> [c.name for c in chromatic_chords()[:4]]
    ['C', 'Cm', 'C#', 'C#m']
    """
    return tuple(Chord(root=note, quality=quality) for note in NOTES for quality in ("maj", "min"))
