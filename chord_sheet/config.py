"""Editor configuration.

Defaults can be overridden through environment variables:

- ``CHORD_SHEET_CHAR_WIDTH``: fallback character width in pixels
- ``CHORD_SHEET_STORE``: path of the session store file
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path

from chord_sheet.editor.persistence import DEFAULT_STORAGE_KEY
from chord_sheet.editor.placement import DEFAULT_CHAR_WIDTH

logger = logging.getLogger(__name__)

CHAR_WIDTH_ENV = "CHORD_SHEET_CHAR_WIDTH"
STORE_ENV = "CHORD_SHEET_STORE"

# The rendering side measures this string to derive the character width
MEASURE_SAMPLE = "abcdefghijklmnopqrstuvwxyz0123456789"


def default_store_path() -> Path:
    return Path.home() / ".chord_sheet" / "store.json"


@dataclass(frozen=True)
class EditorConfig:
    """Settings for an editing session.

    Parameters
    ----------
    char_width_fallback : float
        Character width used until the font has been measured.
    store_path : Path
        JSON file backing the session store.
    storage_key : str
        Key of the session record inside the store.
    measure_sample : str
        Sample string measured by the rendering side.
    print_title : str
        Title of the printable page.
    """

    char_width_fallback: float = DEFAULT_CHAR_WIDTH
    store_path: Path = field(default_factory=default_store_path)
    storage_key: str = DEFAULT_STORAGE_KEY
    measure_sample: str = MEASURE_SAMPLE
    print_title: str = "Chord Sheet"

    @classmethod
    def from_env(cls) -> EditorConfig:
        """Build a config from defaults plus environment overrides."""
        kwargs: dict[str, object] = {}

        raw_width = os.environ.get(CHAR_WIDTH_ENV)
        if raw_width:
            try:
                width = float(raw_width)
            except ValueError:
                width = math.nan
            if math.isfinite(width) and width > 0:
                kwargs["char_width_fallback"] = width
            else:
                logger.warning("Ignoring %s=%r, not a positive number", CHAR_WIDTH_ENV, raw_width)

        raw_store = os.environ.get(STORE_ENV)
        if raw_store:
            kwargs["store_path"] = Path(raw_store).expanduser()

        return cls(**kwargs)
