"""Plain-text chord sheet import.

Turns a monospace sheet with chord lines above lyric lines into editor
lines with chord placements.
"""

from chord_sheet.sheet_import.chord_detector import classify_line, is_chord
from chord_sheet.sheet_import.models import Token
from chord_sheet.sheet_import.parser import parse
from chord_sheet.sheet_import.tokenizer import tokenize_line

__all__ = [
    "Token",
    "classify_line",
    "is_chord",
    "parse",
    "tokenize_line",
]
