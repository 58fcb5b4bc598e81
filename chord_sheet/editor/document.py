"""The editing session: lyrics, lines, placements and scale settings.

A document is in one of two modes. In lyrics mode the free-text blob is
authoritative; locking splits it into lines that chords can be stamped
onto. Unlocking joins the lines back into the blob and keeps every
placement, so locking again without edits restores them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from chord_sheet.editor.export import flatten
from chord_sheet.editor.models import ChordPlacement, EditorMode, Line
from chord_sheet.editor.placement import PlacementEngine
from chord_sheet.models import Chord
from chord_sheet.pitch_class import NOTE_TO_PC, transpose
from chord_sheet.scales import SCALE_INTERVALS, diatonic_chords

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "C"
DEFAULT_SCALE_TYPE = "major"

# Keys that arm diatonic chords by 1-based degree
DEGREE_KEYS = ("1", "2", "3", "4", "5", "6", "7")
ESCAPE_KEY = "Escape"


class EditorModeError(ValueError):
    """An operation was called in the wrong editor mode."""


def _check_scale(root: str, scale_type: str) -> None:
    if root not in NOTE_TO_PC:
        msg = f"Unknown note: {root}"
        raise ValueError(msg)
    if scale_type not in SCALE_INTERVALS:
        msg = f"Unknown scale type: {scale_type}"
        raise ValueError(msg)


def _next_id_after(lines: Iterable[Line]) -> int:
    return 1 + max((c.id for line in lines for c in line.chords), default=0)


class Document:
    """A chord sheet being edited.

    Parameters
    ----------
    engine : PlacementEngine | None
        Pixel to column conversion used by :meth:`export`. A fallback
        engine is created if omitted.
    scale_root : str
        Current key root (sharp spelling).
    scale_type : str
        "major" or "minor".
    lyrics : str
        The lyrics blob.
    lines : Iterable[Line]
        Line records, in order.
    mode : EditorMode
        Which representation is authoritative.

    Examples
    --------
    >>> doc = Document(lyrics="Hello world")
    >>> doc.lock_to_placement_mode()
    >>> doc.arm_chord("G")
    >>> doc.stamp(0, 0.0).text
    'G'
    """

    def __init__(
        self,
        engine: PlacementEngine | None = None,
        *,
        scale_root: str = DEFAULT_ROOT,
        scale_type: str = DEFAULT_SCALE_TYPE,
        lyrics: str = "",
        lines: Iterable[Line] = (),
        mode: EditorMode = EditorMode.LYRICS,
    ) -> None:
        _check_scale(scale_root, scale_type)
        self.engine = engine if engine is not None else PlacementEngine()
        self.scale_root = scale_root
        self.scale_type = scale_type
        self.lyrics = lyrics
        self.lines: tuple[Line, ...] = tuple(lines)
        self.mode = EditorMode(mode)
        self.armed_chord: str | None = None
        self._next_placement_id = _next_id_after(self.lines)

    @property
    def diatonic_chords(self) -> tuple[Chord, ...]:
        """The seven chords of the current scale."""
        return diatonic_chords(self.scale_root, self.scale_type)

    def set_scale(self, root: str | None = None, scale_type: str | None = None) -> None:
        """Change the key root and/or scale type."""
        new_root = self.scale_root if root is None else root
        new_type = self.scale_type if scale_type is None else scale_type
        _check_scale(new_root, new_type)
        self.scale_root, self.scale_type = new_root, new_type

    def arm_chord(self, name: str) -> None:
        """Select ``name`` as the chord to stamp; arming it again disarms."""
        self.armed_chord = None if self.armed_chord == name else name

    def disarm(self) -> None:
        self.armed_chord = None

    def handle_key(self, key: str, *, in_text_field: bool = False, alt: bool = False) -> bool:
        """Apply a keyboard shortcut.

        Digits 1-7 toggle the diatonic chord of that degree; Escape
        disarms. Keys typed into a text field or with Alt held are left
        alone.

        Returns
        -------
        bool
            True if the key was consumed.
        """
        if alt or in_text_field:
            return False
        if key in DEGREE_KEYS:
            chords = self.diatonic_chords
            index = int(key) - 1
            if index < len(chords):
                self.arm_chord(chords[index].name)
            return True
        if key == ESCAPE_KEY:
            self.disarm()
            return True
        return False

    def set_lyrics(self, text: str) -> None:
        """Replace the lyrics blob."""
        if self.mode is not EditorMode.LYRICS:
            msg = "Lyrics can only be edited in lyrics mode"
            raise EditorModeError(msg)
        self.lyrics = text

    def lock_to_placement_mode(self) -> None:
        """Split the lyrics into lines and switch to placement mode.

        Line ``i`` keeps the placements of the previous line with id ``i``;
        lines past the previous end start empty and surplus old lines are
        dropped.
        """
        existing = {line.id: line for line in self.lines}
        new_lines = []
        for index, text in enumerate(self.lyrics.split("\n")):
            previous = existing.get(index)
            chords = previous.chords if previous is not None else ()
            new_lines.append(Line(id=index, text=text, chords=chords))

        self.lines = tuple(new_lines)
        self.mode = EditorMode.PLACEMENT
        logger.debug("Locked lyrics into %d lines", len(self.lines))

    def unlock_to_lyrics_mode(self) -> None:
        """Join the lines back into the lyrics blob and switch to lyrics mode."""
        self.lyrics = "\n".join(line.text for line in self.lines)
        self.mode = EditorMode.LYRICS
        logger.debug("Unlocked lyrics")

    def get_line(self, line_id: int) -> Line | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def _replace_line(self, updated: Line) -> None:
        self.lines = tuple(updated if line.id == updated.id else line for line in self.lines)

    def add_placement(self, line_id: int, chord_text: str, offset: float) -> ChordPlacement | None:
        """Place ``chord_text`` at ``offset`` pixels on line ``line_id``.

        Returns
        -------
        ChordPlacement | None
            The new placement, or None if there is no such line.

        Raises
        ------
        EditorModeError
            If the document is not in placement mode.
        ValueError
            If ``chord_text`` is empty or ``offset`` is not finite.
        """
        if self.mode is not EditorMode.PLACEMENT:
            msg = "Chords can only be placed in placement mode"
            raise EditorModeError(msg)
        if not chord_text:
            msg = "Chord text must not be empty"
            raise ValueError(msg)
        if not math.isfinite(offset):
            msg = f"Chord offset must be finite, got {offset!r}"
            raise ValueError(msg)

        line = self.get_line(line_id)
        if line is None:
            logger.debug("No line %s, placement of %s ignored", line_id, chord_text)
            return None

        placement = ChordPlacement(id=self._next_placement_id, text=chord_text, offset=max(0.0, float(offset)))
        self._next_placement_id += 1
        self._replace_line(line.with_chord(placement))
        logger.debug("Placed %s on line %d at %.1f px", chord_text, line_id, placement.offset)
        return placement

    def stamp(self, line_id: int, offset: float) -> ChordPlacement | None:
        """Place the armed chord; does nothing when no chord is armed."""
        if self.armed_chord is None:
            return None
        return self.add_placement(line_id, self.armed_chord, offset)

    def remove_placement(self, line_id: int, placement_id: int) -> None:
        """Remove a placement. Unknown ids are ignored."""
        line = self.get_line(line_id)
        if line is None or all(c.id != placement_id for c in line.chords):
            return
        self._replace_line(line.without_chord(placement_id))
        logger.debug("Removed placement %d from line %d", placement_id, line_id)

    def transpose_all(self, semitones: int) -> None:
        """Transpose every placement and the key root by ``semitones``."""
        new_lines = tuple(
            Line(
                id=line.id,
                text=line.text,
                chords=tuple(
                    ChordPlacement(id=c.id, text=transpose(c.text, semitones), offset=c.offset)
                    for c in line.chords
                ),
            )
            for line in self.lines
        )
        new_root = transpose(self.scale_root, semitones)
        self.lines, self.scale_root = new_lines, new_root
        logger.debug("Transposed by %+d semitones, key now %s", semitones, new_root)

    def clear(self) -> None:
        """Reset lyrics, lines, mode and armed chord. Scale settings are kept."""
        self.lyrics = ""
        self.lines = ()
        self.mode = EditorMode.LYRICS
        self.armed_chord = None

    def load_sheet(self, text: str) -> None:
        """Replace the document with a parsed plain-text chord sheet."""
        from chord_sheet.sheet_import import parse

        self.lines = tuple(parse(text, self.engine))
        self.lyrics = "\n".join(line.text for line in self.lines)
        self.mode = EditorMode.PLACEMENT
        self.armed_chord = None
        self._next_placement_id = _next_id_after(self.lines)
        logger.debug("Loaded sheet with %d lines", len(self.lines))

    def export(self) -> str:
        """The chord-sheet text shared by copy and print."""
        return flatten(self.lines, self.engine)
