"""Chord sheet editor: document model, placement and export."""

from chord_sheet.editor.document import Document, EditorModeError
from chord_sheet.editor.export import flatten, render_chord_line, render_print_html
from chord_sheet.editor.models import ChordPlacement, EditorMode, Line
from chord_sheet.editor.persistence import (
    JsonFileStore,
    SaveStatus,
    SessionStore,
    session_from_dict,
    session_to_dict,
)
from chord_sheet.editor.placement import DEFAULT_CHAR_WIDTH, PlacementEngine

__all__ = [
    "DEFAULT_CHAR_WIDTH",
    "ChordPlacement",
    "Document",
    "EditorMode",
    "EditorModeError",
    "JsonFileStore",
    "Line",
    "PlacementEngine",
    "SaveStatus",
    "SessionStore",
    "flatten",
    "render_chord_line",
    "render_print_html",
    "session_from_dict",
    "session_to_dict",
]
