"""Read a plain-text chord sheet into editor lines.

Chord lines are folded into the lyric line that follows them: each chord
becomes a placement at the pixel offset of its column, so exporting the
result at the same character width puts every chord back where it was.
"""

from __future__ import annotations

from chord_sheet.editor.models import ChordPlacement, Line
from chord_sheet.editor.placement import PlacementEngine
from chord_sheet.pitch_class import sharpen
from chord_sheet.sheet_import.chord_detector import classify_line, classify_tokens
from chord_sheet.sheet_import.models import Token
from chord_sheet.sheet_import.tokenizer import tokenize_line


def preprocess(text: str) -> list[str]:
    """Normalize line endings and split into lines.

    A single trailing newline does not produce an extra empty line.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def _placements(tokens: list[Token], engine: PlacementEngine, first_id: int) -> tuple[ChordPlacement, ...]:
    chords = [t for t in tokens if t.kind == "chord"]
    return tuple(
        ChordPlacement(id=first_id + i, text=sharpen(t.text), offset=engine.column_to_pixel(t.start))
        for i, t in enumerate(chords)
    )


def is_exported_layout(raw_lines: list[str]) -> bool:
    """Check whether lines alternate chord line, lyric line, as the exporter writes them.

    Every even-indexed line must be a chord line or empty. Lines without
    chords export as an empty chord line, which the general reader would
    otherwise take for a blank lyric line.

    Examples
    --------
    >>> is_exported_layout(["G", "Hello", "", "world"])
    True
    >>> is_exported_layout(["Hello", "", "world"])
    False
    """
    if not raw_lines or len(raw_lines) % 2:
        return False
    return all(classify_line(raw) != "lyric" for raw in raw_lines[::2])


def _parse_pairs(raw_lines: list[str], engine: PlacementEngine) -> list[Line]:
    lines: list[Line] = []
    next_id = 1
    for index in range(0, len(raw_lines), 2):
        tokens = classify_tokens(tokenize_line(raw_lines[index]))
        chords = _placements(tokens, engine, next_id)
        next_id += len(chords)
        lines.append(Line(id=len(lines), text=raw_lines[index + 1], chords=chords))
    return lines


def parse(text: str, engine: PlacementEngine | None = None) -> list[Line]:
    """Parse a chord sheet into lines with placements.

    Parameters
    ----------
    text : str
        Chord sheet text, chord lines above lyric lines.
        Text written by the exporter is read back pair by pair, so every
        line keeps its own lyric even when it has no chords.
    engine : PlacementEngine | None
        Converts columns to pixel offsets. Defaults to the fallback width.

    Returns
    -------
    list[Line]
        Lines with ids 0..n-1 and placement ids numbered from 1.

    Examples
    --------
    >>> lines = parse("G     C\\nHello world\\n", PlacementEngine(char_width=10.0))
    >>> [(c.text, c.offset) for c in lines[0].chords]
    [('G', 0.0), ('C', 60.0)]
    >>> lines[0].text
    'Hello world'
    """
    if engine is None:
        engine = PlacementEngine()

    raw_lines = preprocess(text)
    if is_exported_layout(raw_lines):
        return _parse_pairs(raw_lines, engine)

    lines: list[Line] = []
    next_id = 1
    i = 0
    n = len(raw_lines)

    while i < n:
        raw = raw_lines[i]
        tokens = classify_tokens(tokenize_line(raw))

        if classify_line(raw, tokens) != "chord":
            lines.append(Line(id=len(lines), text=raw))
            i += 1
            continue

        chords = _placements(tokens, engine, next_id)
        next_id += len(chords)

        # Pair with the following lyric line
        lyric = ""
        if i + 1 < n and classify_line(raw_lines[i + 1]) == "lyric":
            lyric = raw_lines[i + 1]
            i += 1

        lines.append(Line(id=len(lines), text=lyric, chords=chords))
        i += 1

    return lines
