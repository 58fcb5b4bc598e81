"""Flatten positioned chords into monospace chord-sheet text.

Each line becomes two text lines: the chord line, rebuilt with spaces so
every chord sits over the column it was placed at, then the lyric.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chord_sheet.editor.models import ChordPlacement, Line
    from chord_sheet.editor.placement import PlacementEngine


def render_chord_line(chords: Iterable[ChordPlacement], engine: PlacementEngine) -> str:
    """Render placements into a single line of spaces and chord names.

    Placements are ordered by offset (stable, so ties keep insertion
    order). A chord whose column falls inside the text already written is
    appended directly after it with no space.

    Parameters
    ----------
    chords : Iterable[ChordPlacement]
        Placements of one line, in any order.
    engine : PlacementEngine
        Supplies the pixel to column conversion.

    Returns
    -------
    str
        The chord line, without a trailing newline.

    Examples
    --------
    >>> from chord_sheet.editor.models import ChordPlacement
    >>> from chord_sheet.editor.placement import PlacementEngine
    >>> chords = [ChordPlacement(2, "C", 60.0), ChordPlacement(1, "G", 0.0)]
    >>> render_chord_line(chords, PlacementEngine(char_width=10.0))
    'G     C'
    """
    parts: list[str] = []
    cursor = 0

    for chord in sorted(chords, key=lambda c: c.offset):
        target = engine.pixel_to_column(chord.offset)
        padding = max(0, target - cursor)
        parts.append(" " * padding)
        parts.append(chord.text)
        cursor += padding + len(chord.text)

    return "".join(parts)


def flatten(lines: Iterable[Line], engine: PlacementEngine) -> str:
    """Export lines as chord-sheet text.

    Every line contributes its chord line and its lyric, each followed by
    a newline, even when either is empty.

    Examples
    --------
    >>> from chord_sheet.editor.models import ChordPlacement, Line
    >>> from chord_sheet.editor.placement import PlacementEngine
    >>> line = Line(0, "Hello world", (ChordPlacement(1, "G", 0.0),))
    >>> flatten([line], PlacementEngine(char_width=10.0))
    'G\\nHello world\\n'
    """
    out: list[str] = []
    for line in lines:
        out.append(render_chord_line(line.chords, engine))
        out.append("\n")
        out.append(line.text)
        out.append("\n")
    return "".join(out)


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def render_print_html(text: str, title: str = "Chord Sheet") -> str:
    """Wrap exported text in a printable HTML page.

    Newlines become ``<br>`` tags; the body uses ``white-space: pre`` so
    the alignment spaces survive.
    """
    title_safe = _escape_html(title)
    body = _escape_html(text).replace("\n", "<br>")

    return f"""<html>
<head>
  <meta charset="UTF-8" />
  <title>{title_safe}</title>
  <style>
    body {{
      font-family: 'Inconsolata', monospace;
      white-space: pre;
      font-size: 1rem;
      line-height: 1.8;
    }}
  </style>
</head>
<body>{body}</body>
</html>"""
