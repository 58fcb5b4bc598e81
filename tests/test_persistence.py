"""Tests for session persistence."""

import json
import logging
from pathlib import Path

import pytest

from chord_sheet.editor.document import Document
from chord_sheet.editor.models import ChordPlacement, EditorMode, Line
from chord_sheet.editor.persistence import (
    JsonFileStore,
    SaveStatus,
    SessionStore,
    session_from_dict,
    session_to_dict,
)
from chord_sheet.editor.placement import PlacementEngine


def make_document() -> Document:
    doc = Document(scale_root="E", scale_type="minor", lyrics="la la\nlo")
    doc.lock_to_placement_mode()
    doc.add_placement(0, "Em", 0.0)
    doc.add_placement(1, "B7", 24.5)
    return doc


class TestSessionDict:
    def test_layout(self) -> None:
        data = session_to_dict(make_document())
        assert data == {
            "scaleRootNote": "E",
            "scaleType": "minor",
            "lines": [
                {"id": 0, "text": "la la", "chords": [{"id": 1, "text": "Em", "offset": 0.0}]},
                {"id": 1, "text": "lo", "chords": [{"id": 2, "text": "B7", "offset": 24.5}]},
            ],
            "lyricsBlob": "la la\nlo",
            "mode": "chords",
        }

    def test_restore(self) -> None:
        original = make_document()
        restored = session_from_dict(json.loads(json.dumps(session_to_dict(original))))
        assert restored.lines == original.lines
        assert restored.lyrics == original.lyrics
        assert restored.mode is EditorMode.PLACEMENT
        assert (restored.scale_root, restored.scale_type) == ("E", "minor")

    def test_missing_fields_default(self) -> None:
        doc = session_from_dict({})
        assert doc.scale_root == "C"
        assert doc.scale_type == "major"
        assert doc.lines == ()
        assert doc.lyrics == ""
        assert doc.mode is EditorMode.LYRICS

    def test_integer_offset_accepted(self) -> None:
        doc = session_from_dict({"lines": [{"id": 0, "text": "", "chords": [{"id": 3, "text": "G", "offset": 8}]}]})
        assert doc.lines == (Line(0, "", (ChordPlacement(3, "G", 8.0),)),)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"scaleRootNote": "H"},
            {"scaleType": 3},
            {"mode": "edit"},
            {"lines": "nope"},
            {"lines": [{"id": "0", "text": ""}]},
            {"lines": [{"id": 0, "text": "", "chords": [{"id": 1, "text": "G"}]}]},
            {"lines": [{"id": 0, "text": "", "chords": [{"id": True, "text": "G", "offset": 0}]}]},
            {"lines": [{"id": 0, "text": "", "chords": [{"id": 1, "text": "G", "offset": float("nan")}]}]},
            {"lines": [{"id": 0, "text": "", "chords": [{"id": 1, "text": "G", "offset": float("inf")}]}]},
        ],
    )
    def test_malformed_raises(self, data: object) -> None:
        with pytest.raises((TypeError, ValueError, KeyError)):
            session_from_dict(data)  # type: ignore[arg-type]


class TestJsonFileStore:
    def test_get_missing_file(self, tmp_path: Path) -> None:
        assert JsonFileStore(tmp_path / "store.json").get("k") is None

    def test_set_get_remove(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path / "nested" / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        assert store.get("a") == "1"
        store.remove("a")
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_corrupt_file_overwritten_on_write(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json")
        store = JsonFileStore(path)
        with pytest.raises(ValueError):
            store.get("k")
        store.set("k", "v")
        assert store.get("k") == "v"


class FailingStore(JsonFileStore):
    def set(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


class TestSessionStore:
    def test_save_and_load(self, tmp_path: Path) -> None:
        store = SessionStore(JsonFileStore(tmp_path / "store.json"))
        assert store.status is SaveStatus.SAVED
        assert store.save(make_document())
        assert store.status is SaveStatus.AUTO_SAVED

        engine = PlacementEngine(char_width=10.0)
        doc = store.load(engine)
        assert doc.engine is engine
        assert doc.lines == make_document().lines

    def test_load_absent(self, tmp_path: Path) -> None:
        doc = SessionStore(JsonFileStore(tmp_path / "store.json")).load()
        assert doc.lines == ()
        assert doc.mode is EditorMode.LYRICS

    def test_load_corrupt_record(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        backing = JsonFileStore(tmp_path / "store.json")
        backing.set("onlyChordsSheetData", "{broken")
        with caplog.at_level(logging.WARNING):
            doc = SessionStore(backing).load()
        assert doc.lines == ()
        assert doc.scale_root == "C"
        assert "Failed to load" in caplog.text

    def test_load_non_finite_offset(self, tmp_path: Path) -> None:
        """A stored NaN offset discards the record and export keeps working."""
        backing = JsonFileStore(tmp_path / "store.json")
        raw = '{"lines": [{"id": 0, "text": "hi", "chords": [{"id": 1, "text": "G", "offset": NaN}]}], "mode": "chords"}'
        backing.set("onlyChordsSheetData", raw)
        doc = SessionStore(backing).load(PlacementEngine(char_width=10.0))
        assert doc.lines == ()
        assert doc.mode is EditorMode.LYRICS
        assert doc.export() == ""

    def test_load_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2")
        doc = SessionStore(JsonFileStore(path)).load()
        assert doc.lyrics == ""

    def test_save_failure(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        store = SessionStore(FailingStore(tmp_path / "store.json"))
        doc = make_document()
        with caplog.at_level(logging.WARNING):
            assert not store.save(doc)
        assert store.status is SaveStatus.ERROR
        assert "quota exceeded" in caplog.text
        # editing carries on
        assert doc.add_placement(0, "G", 0.0) is not None

    def test_clear(self, tmp_path: Path) -> None:
        backing = JsonFileStore(tmp_path / "store.json")
        store = SessionStore(backing, key="song")
        store.save(make_document())
        store.clear()
        assert backing.get("song") is None
        assert store.load().lines == ()

    def test_custom_key(self, tmp_path: Path) -> None:
        backing = JsonFileStore(tmp_path / "store.json")
        SessionStore(backing, key="one").save(make_document())
        assert SessionStore(backing, key="two").load().lines == ()
        assert SessionStore(backing, key="one").load().scale_root == "E"
