"""Session persistence.

A session is stored as one JSON record under a key in a small JSON-file
key-value store. Reading never fails: a missing or unreadable record
yields a fresh default session. A failed write is reported through
:attr:`SessionStore.status` and editing carries on in memory.
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any

from chord_sheet.editor.document import DEFAULT_ROOT, DEFAULT_SCALE_TYPE, Document
from chord_sheet.editor.models import ChordPlacement, EditorMode, Line
from chord_sheet.editor.placement import PlacementEngine

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "onlyChordsSheetData"


class SaveStatus(str, Enum):
    """Passive save indicator shown to the user."""

    SAVED = "Saved"
    AUTO_SAVED = "Auto-saved"
    ERROR = "Error"


def placement_to_dict(placement: ChordPlacement) -> dict[str, Any]:
    return {"id": placement.id, "text": placement.text, "offset": placement.offset}


def line_to_dict(line: Line) -> dict[str, Any]:
    return {
        "id": line.id,
        "text": line.text,
        "chords": [placement_to_dict(c) for c in line.chords],
    }


def session_to_dict(document: Document) -> dict[str, Any]:
    """Serialize a document to the persisted record layout.

    The armed chord and the character width are not persisted.
    """
    return {
        "scaleRootNote": document.scale_root,
        "scaleType": document.scale_type,
        "lines": [line_to_dict(line) for line in document.lines],
        "lyricsBlob": document.lyrics,
        "mode": document.mode.value,
    }


def _require(value: Any, kind: type | tuple[type, ...], what: str) -> Any:
    # bool is an int subclass; a stored true/false is never a valid id or offset
    if isinstance(value, bool) or not isinstance(value, kind):
        msg = f"Invalid {what}: {value!r}"
        raise TypeError(msg)
    return value


def placement_from_dict(data: dict[str, Any]) -> ChordPlacement:
    offset = float(_require(data["offset"], (int, float), "placement offset"))
    # json accepts NaN and Infinity tokens
    if not math.isfinite(offset):
        msg = f"Invalid placement offset: {offset!r}"
        raise ValueError(msg)
    return ChordPlacement(
        id=_require(data["id"], int, "placement id"),
        text=_require(data["text"], str, "placement text"),
        offset=offset,
    )


def line_from_dict(data: dict[str, Any]) -> Line:
    return Line(
        id=_require(data["id"], int, "line id"),
        text=_require(data["text"], str, "line text"),
        chords=tuple(placement_from_dict(c) for c in _require(data.get("chords", []), list, "chords")),
    )


def session_from_dict(data: dict[str, Any], engine: PlacementEngine | None = None) -> Document:
    """Rebuild a document from a persisted record.

    Missing fields take their defaults.

    Raises
    ------
    TypeError, ValueError, KeyError
        If the record is malformed.
    """
    _require(data, dict, "session record")
    lines = _require(data.get("lines", []), list, "lines")
    return Document(
        engine,
        scale_root=_require(data.get("scaleRootNote", DEFAULT_ROOT), str, "root note"),
        scale_type=_require(data.get("scaleType", DEFAULT_SCALE_TYPE), str, "scale type"),
        lyrics=_require(data.get("lyricsBlob", ""), str, "lyrics"),
        lines=[line_from_dict(line) for line in lines],
        mode=EditorMode(data.get("mode", EditorMode.LYRICS.value)),
    )


class JsonFileStore:
    """A string key-value store kept in one JSON file.

    Parameters
    ----------
    path : str | Path
        The backing file. Created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            msg = f"Store file {self.path} does not hold an object"
            raise ValueError(msg)
        return data

    def _read_for_write(self) -> dict[str, str]:
        try:
            return self._read_all()
        except ValueError as e:
            logger.warning("Overwriting unreadable store file %s: %s", self.path, e)
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_for_write()
        if data.pop(key, None) is not None:
            self._write_all(data)


class SessionStore:
    """Load and save the editing session under one storage key.

    Parameters
    ----------
    store : JsonFileStore
        Backing key-value store.
    key : str
        Storage key of the session record.
    """

    def __init__(self, store: JsonFileStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.store = store
        self.key = key
        self.status = SaveStatus.SAVED

    def load(self, engine: PlacementEngine | None = None) -> Document:
        """Restore the stored session, or a default one if none is usable."""
        try:
            raw = self.store.get(self.key)
            if raw is None:
                logger.debug("No stored session under %r", self.key)
                return Document(engine)
            document = session_from_dict(json.loads(raw), engine)
        except (OSError, TypeError, ValueError, KeyError) as e:
            logger.warning("Failed to load stored session, starting empty: %s", e)
            return Document(engine)
        logger.debug("Restored session with %d lines", len(document.lines))
        return document

    def save(self, document: Document) -> bool:
        """Persist the session.

        Returns
        -------
        bool
            False if the write failed; :attr:`status` is then ERROR.
        """
        try:
            self.store.set(self.key, json.dumps(session_to_dict(document)))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to save session: %s", e)
            self.status = SaveStatus.ERROR
            return False
        self.status = SaveStatus.AUTO_SAVED
        return True

    def clear(self) -> None:
        """Remove the stored record. A failure is logged, not raised."""
        try:
            self.store.remove(self.key)
        except (OSError, ValueError) as e:
            logger.warning("Failed to remove stored session: %s", e)
