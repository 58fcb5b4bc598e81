"""Tests for plain-text chord sheet import."""

import pytest

from chord_sheet.editor.document import Document
from chord_sheet.editor.export import flatten
from chord_sheet.editor.models import EditorMode
from chord_sheet.editor.placement import PlacementEngine
from chord_sheet.sheet_import import classify_line, is_chord, parse, tokenize_line
from chord_sheet.sheet_import.parser import is_exported_layout


@pytest.fixture
def engine() -> PlacementEngine:
    return PlacementEngine(char_width=10.0)


class TestTokenizeLine:
    def test_spans(self) -> None:
        tokens = tokenize_line("  Am   F")
        assert [(t.text, t.start, t.end) for t in tokens] == [("Am", 2, 4), ("F", 7, 8)]

    def test_empty(self) -> None:
        assert tokenize_line("   ") == []

    def test_tabs_expanded(self) -> None:
        tokens = tokenize_line("G\tC", tab_size=4)
        assert [(t.text, t.start, t.end) for t in tokens] == [("G", 0, 1), ("C", 4, 5)]


class TestIsChord:
    @pytest.mark.parametrize("text", ["C", "Am", "F#m7", "Bb", "Cmaj7", "G/B", "Dsus4", "Edim"])
    def test_chords(self, text: str) -> None:
        assert is_chord(text)

    @pytest.mark.parametrize("text", ["", "Hello", "am", "H", "[Chorus]", "x" * 20])
    def test_not_chords(self, text: str) -> None:
        assert not is_chord(text)


class TestClassifyLine:
    def test_kinds(self) -> None:
        assert classify_line("") == "empty"
        assert classify_line("   ") == "empty"
        assert classify_line("G    D/F#   Em") == "chord"
        assert classify_line("Hello darkness my old friend") == "lyric"
        assert classify_line("[Verse 1]") == "lyric"

    def test_single_word_blocks_chord_line(self) -> None:
        assert classify_line("G  C  (twice)") == "lyric"


class TestParse:
    def test_chord_over_lyric(self, engine: PlacementEngine) -> None:
        lines = parse("G     C\nHello world\n", engine)
        assert len(lines) == 1
        assert lines[0].id == 0
        assert lines[0].text == "Hello world"
        assert [(c.id, c.text, c.offset) for c in lines[0].chords] == [(1, "G", 0.0), (2, "C", 60.0)]

    def test_flats_respelled(self, engine: PlacementEngine) -> None:
        lines = parse("Bb  Ebm\nla la", engine)
        assert [c.text for c in lines[0].chords] == ["A#", "D#m"]

    def test_mixed_sheet(self, engine: PlacementEngine) -> None:
        text = "[Intro]\nG  D\n\nG      Em\nfirst line\nno chords here\n"
        lines = parse(text, engine)
        assert [(line.id, line.text, len(line.chords)) for line in lines] == [
            (0, "[Intro]", 0),
            (1, "", 2),
            (2, "", 0),
            (3, "first line", 2),
            (4, "no chords here", 0),
        ]

    def test_trailing_chord_line(self, engine: PlacementEngine) -> None:
        lines = parse("Am", engine)
        assert lines[0].text == ""
        assert [c.text for c in lines[0].chords] == ["Am"]

    def test_crlf(self, engine: PlacementEngine) -> None:
        lines = parse("C\r\nhey\r\n", engine)
        assert lines[0].text == "hey"

    def test_export_reproduces_columns(self, engine: PlacementEngine) -> None:
        text = "G     C    D7\nHello world again\n   Am\nsecond\n"
        assert flatten(parse(text, engine), engine) == text

    def test_default_engine(self) -> None:
        lines = parse("C   G\nword")
        assert lines[0].chords[1].offset == 4 * PlacementEngine().char_width


class TestLoadSheet:
    def test_load_into_document(self, engine: PlacementEngine) -> None:
        doc = Document(engine, lyrics="old")
        doc.arm_chord("G")
        doc.load_sheet("G     C\nHello world\nthe end")
        assert doc.mode is EditorMode.PLACEMENT
        assert doc.lyrics == "Hello world\nthe end"
        assert doc.armed_chord is None
        assert doc.add_placement(1, "F", 0.0).id == 3
        doc.transpose_all(2)
        assert doc.export() == "A     D\nHello world\nG\nthe end\n"


class TestExportedLayout:
    def test_detects_export(self) -> None:
        assert is_exported_layout(["G", "Hello", "", "world"])
        assert is_exported_layout(["", ""])

    def test_rejects_other_text(self) -> None:
        assert not is_exported_layout([])
        assert not is_exported_layout(["Hello", "", "world"])
        assert not is_exported_layout(["verse", "", "G", "more"])

    def test_chordless_lines_survive_reimport(self, engine: PlacementEngine) -> None:
        """Exporting and importing keeps every line, chords or not."""
        doc = Document(engine, lyrics="Hello world\n\nno chords\nA")
        doc.lock_to_placement_mode()
        doc.add_placement(0, "G", 0.0)
        doc.add_placement(0, "C", 60.0)
        doc.add_placement(3, "Em", 20.0)
        exported = doc.export()

        lines = parse(exported, engine)
        assert [line.text for line in lines] == ["Hello world", "", "no chords", "A"]
        assert [[c.text for c in line.chords] for line in lines] == [["G", "C"], [], [], ["Em"]]
        assert flatten(lines, engine) == exported

    def test_load_exported_sheet(self, engine: PlacementEngine) -> None:
        doc = Document(engine)
        doc.load_sheet("D\nfirst\n\nsecond\n")
        assert doc.lyrics == "first\nsecond"
        assert [len(line.chords) for line in doc.lines] == [1, 0]
