"""Command line interface: ``docman -c citations.json [-o out.txt] input.txt``."""
from __future__ import annotations

import argparse
import logging
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import List

from .app import DocumentManager
from .config import Settings
from .errors import DocmanError, DocumentIOError
from .lookup import MetadataLookupClient

STDIN_TOKEN = "-"


class _StoreOnce(argparse.Action):
    """Store an option value, rejecting a second occurrence of the flag."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            parser.error(f"{option_string} may only be given once")
        setattr(namespace, self.dest, values)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docman", description="Append a bibliography for the [id] markers in a document"
    )
    parser.add_argument(
        "-c",
        "--citations",
        action=_StoreOnce,
        type=Path,
        required=True,
        help="Path to the JSON file describing the citations",
    )
    parser.add_argument(
        "-o",
        "--output",
        action=_StoreOnce,
        type=Path,
        help="Write the result to this file instead of standard output",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject citation entries with missing fields instead of skipping them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("input", help=f"Document to annotate, or '{STDIN_TOKEN}' for standard input")
    return parser


def _read_document(source: str) -> str:
    try:
        if source == STDIN_TOKEN:
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentIOError(f"Cannot read document {source}: {exc}") from exc


def _output_mode(destination: Path) -> int:
    """Keep the mode of an existing output file, else use the umask default."""
    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_output(destination: Path, content: str) -> None:
    """Replace ``destination`` in one step so a failed run leaves no partial file."""
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=destination.parent, delete=False, suffix=".tmp"
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(content)
        os.chmod(tmp_path, _output_mode(destination))
        tmp_path.replace(destination)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise DocumentIOError(f"Cannot write output {destination}: {exc}") from exc


def main(argv: List[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        lookup = MetadataLookupClient(Settings.from_env())
        manager = DocumentManager(lookup=lookup, strict=args.strict)
        catalog = manager.load_catalog(args.citations)
        text = _read_document(args.input)
        result = manager.annotate(text, catalog)
        if args.output:
            _write_output(args.output, result)
        else:
            sys.stdout.write(result)
    except DocmanError as exc:
        print(f"docman: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
