"""Pitch class operations over the 12-tone chromatic space.

Notes are pitch classes 0-11 (C=0) spelled with sharps only. Chord names
are handled as a root token followed by an opaque quality string, so
transposition works for any suffix ("m7", "sus4", "add9", ...) without
having to understand it.
"""

from __future__ import annotations

import re

from chord_sheet.models import Chord

# Pitch class to note name (sharps only)
NOTES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {note: pc for pc, note in enumerate(NOTES)}

# Flat spellings rewritten to their sharp equivalent
FLAT_TO_SHARP: dict[str, str] = {
    "Cb": "B",
    "Db": "C#",
    "Eb": "D#",
    "Fb": "E",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

# Leading root token of a chord name: letter A-G, optional sharp
ROOT_RE = re.compile(r"^[A-G]#?")


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name in sharp spelling (e.g., "C", "F#").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("C")
    0
    >>> note_to_pc("F#")
    6
    """
    if note in NOTE_TO_PC:
        return NOTE_TO_PC[note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int) -> str:
    """Spell a pitch class, wrapping any integer into 0-11.

    Examples
    --------
    >>> pc_to_note(13)
    'C#'
    >>> pc_to_note(-1)
    'B'
    """
    return NOTES[pc % 12]


def split_chord_name(name: str) -> tuple[str, str] | None:
    """Split a chord name into its root token and quality remainder.

    Parameters
    ----------
    name : str
        Chord name (e.g., "F#m7", "Bdim", "G").

    Returns
    -------
    tuple[str, str] | None
        ``(root, remainder)``, or None if the name does not start with a
        root note.

    Examples
    --------
    >>> split_chord_name("F#m7")
    ('F#', 'm7')
    >>> split_chord_name("X7sus4") is None
    True
    """
    match = ROOT_RE.match(name)
    if not match:
        return None
    root = match.group(0)
    return root, name[len(root) :]


def transpose(name: str, semitones: int) -> str:
    """Transpose a chord or note name by a number of semitones.

    The quality remainder is carried over verbatim. Names that do not
    start with a root note are returned unchanged.

    Parameters
    ----------
    name : str
        Chord or bare note name (e.g., "Am", "C#", "G7sus4").
    semitones : int
        Signed offset (positive = up).

    Returns
    -------
    str
        The transposed name.

    Examples
    --------
    >>> transpose("Am", 2)
    'Bm'
    >>> transpose("C", -1)
    'B'
    >>> transpose("X7sus4", 5)
    'X7sus4'
    """
    parts = split_chord_name(name)
    if parts is None:
        return name
    root, remainder = parts
    if root not in NOTE_TO_PC:
        # "E#" and "B#" match the root pattern but have no sharp spelling
        return name
    # Python's % is already a true modulo for negative offsets
    new_pc = (NOTE_TO_PC[root] + semitones) % 12
    return f"{NOTES[new_pc]}{remainder}"


def transpose_chord(chord: Chord, semitones: int) -> Chord:
    """Transpose a Chord by a number of semitones.

    Examples
    --------
    >>> from chord_sheet.models import Chord
    >>> transpose_chord(Chord(root="C", quality="maj"), 2).root
    'D'
    """
    return Chord(root=pc_to_note(note_to_pc(chord.root) + semitones), quality=chord.quality)


def sharpen(name: str) -> str:
    """Respell a flat root as its sharp equivalent, keeping the remainder.

    Examples
    --------
    >>> sharpen("Bbm7")
    'A#m7'
    >>> sharpen("Am")
    'Am'
    """
    flat = name[:2]
    if flat in FLAT_TO_SHARP:
        return FLAT_TO_SHARP[flat] + name[2:]
    return name
