"""Command‑line interface for Review Mode.

This module runs the same review pipeline a viewer host runs, and
prints the outcome as JSON.  It is mostly useful for checking what
review mode will find before wiring patterns into the viewer.
Run ``python -m review_mode.cli --help`` for usage.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config_service import ConfigService
from .errors import ReviewError
from .navigator import ReviewNavigator
from .patterns import build_pattern_set
from .radix import extract_radix


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Review Mode – discover related image sets from a few loaded files",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("command", choices=["patterns", "scan", "resolve"], help="Action to perform")
    parser.add_argument("files", nargs="+", help="Loaded image files, one per slot, in slot order")
    parser.add_argument(
        "--pattern",
        action="append",
        default=None,
        help="Edited slot pattern; repeat once per slot to rescan with hand-written patterns",
    )
    parser.add_argument("--radix", help="Radix to resolve (resolve command only)")
    parser.add_argument("--min-slots", type=_positive_int, default=None, help="Override min_slots_matched")
    parser.add_argument("--app-dir", type=Path, default=Path.cwd(), help="Application directory used in portable mode")
    parser.add_argument("--portable", "-p", action="store_true", help="Force portable mode")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config_service = ConfigService(app_dir=args.app_dir.expanduser().resolve())
    settings = config_service.load_settings(cli_portable=args.portable)
    if args.min_slots is not None:
        settings = replace(settings, min_slots_matched=args.min_slots)

    if args.command == "patterns":
        try:
            extraction = extract_radix(args.files, settings.separators)
        except ReviewError as exc:
            print(f"Error: {exc}")
            return 1
        patterns = build_pattern_set(extraction, settings.generalize_digits, settings.separators)
        print(json.dumps(patterns.to_dict(), indent=2))
        return 0

    if args.command == "resolve" and not args.radix:
        print("Error: --radix is required for resolve")
        return 1

    navigator = ReviewNavigator(settings)
    try:
        resolved = navigator.activate(args.files)
        if args.pattern:
            resolved = navigator.refresh(args.pattern)
        if args.command == "resolve":
            resolved = navigator.resolve(args.radix)
    except ReviewError as exc:
        print(f"Error: {exc}")
        return 1
    session = navigator.session
    report = {
        "directory": str(session.directory),
        "patterns": session.patterns.to_dict(),
        "radixes": list(session.radixes),
        "resolved": resolved.to_dict(),
    }
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
