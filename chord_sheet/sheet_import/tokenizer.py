"""Column-aware tokenizer for monospace chord sheets.

Columns are character indices, the same grid the exporter pads chords
onto. Tabs are expanded first so a tab-indented chord lands on the
column it is displayed at.
"""

import re

from chord_sheet.sheet_import.models import Token

TOKEN_RE = re.compile(r"\S+")

TAB_SIZE = 8


def tokenize_line(line: str, tab_size: int = TAB_SIZE) -> list[Token]:
    """Split a line on whitespace, keeping each token's column span.

    Parameters
    ----------
    line : str
        The line to tokenize, without its newline.
    tab_size : int
        Tab stop width used to expand tabs before measuring columns.

    Returns
    -------
    list[Token]
        Tokens with start (inclusive), end (exclusive) and kind "other";
        classification happens in the chord detector.

    Examples
    --------
    >>> [(t.text, t.start, t.end) for t in tokenize_line("Gm     C")]
    [('Gm', 0, 2), ('C', 7, 8)]
    >>> [(t.text, t.start) for t in tokenize_line("\\tAm")]
    [('Am', 8)]
    """
    expanded = line.expandtabs(tab_size)
    return [
        Token(text=m.group(0), start=m.start(), end=m.end(), kind="other")
        for m in TOKEN_RE.finditer(expanded)
    ]
