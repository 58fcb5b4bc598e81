"""Command line front end for the chord sheet editor.

Usage:
    chord-sheet lyrics song.txt
    chord-sheet lock
    chord-sheet place 0 G 0
    chord-sheet transpose -2
    chord-sheet show
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from chord_sheet.config import EditorConfig
from chord_sheet.editor import (
    Document,
    EditorMode,
    JsonFileStore,
    PlacementEngine,
    SessionStore,
    render_print_html,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chord-sheet", description="Place chords over lyrics and export chord sheets")
    parser.add_argument("--store", type=Path, default=None, help="Session store file (default: from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the exported chord sheet")

    p = sub.add_parser("lyrics", help="Replace the lyrics with the contents of a file")
    p.add_argument("file", type=Path)

    sub.add_parser("lock", help="Split lyrics into lines for chord placement")
    sub.add_parser("unlock", help="Go back to editing lyrics")

    p = sub.add_parser("place", help="Place a chord above a line at a character column")
    p.add_argument("line", type=int)
    p.add_argument("chord")
    p.add_argument("column", type=int)

    p = sub.add_parser("remove", help="Remove a placed chord")
    p.add_argument("line", type=int)
    p.add_argument("placement", type=int)

    p = sub.add_parser("import", help="Import a plain-text chord sheet")
    p.add_argument("file", type=Path)

    p = sub.add_parser("transpose", help="Transpose all chords and the key")
    p.add_argument("semitones", type=int)

    p = sub.add_parser("scale", help="Set the key and list its diatonic chords")
    p.add_argument("root")
    p.add_argument("--minor", action="store_true", help="Use the natural minor scale")

    p = sub.add_parser("print", help="Write a printable HTML page")
    p.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout)")

    sub.add_parser("clear", help="Discard the session")

    return parser


def run(args: argparse.Namespace, doc: Document, store: SessionStore, config: EditorConfig) -> bool:
    """Apply one command. Returns True if the session changed."""
    command = args.command

    if command == "show":
        sys.stdout.write(doc.export())
        return False

    if command == "lyrics":
        text = args.file.read_text(encoding="utf-8")
        if doc.mode is EditorMode.PLACEMENT:
            doc.unlock_to_lyrics_mode()
        doc.set_lyrics(text)
        return True

    if command == "lock":
        doc.lock_to_placement_mode()
        print(f"{len(doc.lines)} lines ready for chords")
        return True

    if command == "unlock":
        doc.unlock_to_lyrics_mode()
        return True

    if command == "place":
        placement = doc.add_placement(args.line, args.chord, doc.engine.column_to_pixel(args.column))
        if placement is None:
            print(f"No line {args.line}", file=sys.stderr)
            return False
        print(f"Placed {placement.text} (id {placement.id})")
        return True

    if command == "remove":
        doc.remove_placement(args.line, args.placement)
        return True

    if command == "import":
        doc.load_sheet(args.file.read_text(encoding="utf-8"))
        print(f"Imported {len(doc.lines)} lines")
        return True

    if command == "transpose":
        doc.transpose_all(args.semitones)
        print(f"Key: {doc.scale_root} {doc.scale_type}")
        return True

    if command == "scale":
        doc.set_scale(args.root, "minor" if args.minor else "major")
        print(" ".join(f"{i}:{c.name}" for i, c in enumerate(doc.diatonic_chords, 1)))
        return True

    if command == "print":
        html = render_print_html(doc.export(), config.print_title)
        if args.output is None:
            sys.stdout.write(html + "\n")
        else:
            args.output.write_text(html, encoding="utf-8")
            print(f"Wrote {args.output}")
        return False

    if command == "clear":
        doc.clear()
        store.clear()
        print("Cleared and removed saved data.")
        return False

    msg = f"Unknown command: {command}"
    raise ValueError(msg)


def main(argv: list[str] | None = None) -> int:
    """Run the chord-sheet command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = EditorConfig.from_env()
    store = SessionStore(JsonFileStore(args.store or config.store_path), config.storage_key)
    doc = store.load(PlacementEngine(fallback=config.char_width_fallback))

    try:
        changed = run(args, doc, store, config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if changed and not store.save(doc):
        print("Warning: session could not be saved", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
