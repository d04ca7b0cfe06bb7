from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from sharemyad.models import ArchiveIntakeError
from sharemyad.utils import display_processing_result, processing_result_to_dict
from sharemyad.workflows.upload_pipeline import process_archive


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharemyad",
        description="Inspect creative archives and detect creative sets.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="Process a zip archive and report")
    inspect_parser.add_argument("archive", type=Path, help="Path to the .zip archive")
    inspect_parser.add_argument("--json", action="store_true", help="Print JSON output")
    inspect_parser.add_argument("-v", "--verbose", action="store_true", help="Enable logging")
    return parser


def run_inspect(archive: Path, as_json: bool = False) -> int:
    """Process *archive* and print the detected sets and folders.

    Returns:
        Exit code (0 for success, 1 when the archive is rejected).
    """
    try:
        result = process_archive(archive)
    except ArchiveIntakeError as exc:
        if as_json:
            print(json.dumps({"error": {"code": exc.code, "message": exc.message}}))
        else:
            print(f"\n❌ Error: {exc.message}")
        return 1

    if as_json:
        print(json.dumps(processing_result_to_dict(result), indent=2))
    else:
        print(f"\n📦 Processing: {archive.name}")
        print("-" * 60)
        display_processing_result(result)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run_inspect(args.archive, as_json=args.json)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
