"""Chord sheet editor library.

Write lyrics, stamp chords above them at free pixel positions, transpose,
and export monospace text where every chord sits over the right letter.

Examples
--------
>>> from chord_sheet import Document, PlacementEngine, diatonic_chords

>>> [c.name for c in diatonic_chords("G", "major")]
['G', 'Am', 'Bm', 'C', 'D', 'Em', 'F#dim']

>>> doc = Document(PlacementEngine(char_width=10.0), lyrics="Hello world")
>>> doc.lock_to_placement_mode()
>>> _ = doc.add_placement(0, "G", 0.0)
>>> _ = doc.add_placement(0, "C", 60.0)
>>> print(doc.export(), end="")
G     C
Hello world
"""

from chord_sheet.editor import (
    ChordPlacement,
    Document,
    EditorMode,
    EditorModeError,
    Line,
    PlacementEngine,
    flatten,
    render_print_html,
)
from chord_sheet.models import Chord
from chord_sheet.pitch_class import NOTES, transpose, transpose_chord
from chord_sheet.scales import chromatic_chords, diatonic_chords

__all__ = [
    "NOTES",
    "Chord",
    "ChordPlacement",
    "Document",
    "EditorMode",
    "EditorModeError",
    "Line",
    "PlacementEngine",
    "chromatic_chords",
    "diatonic_chords",
    "flatten",
    "render_print_html",
    "transpose",
    "transpose_chord",
]
