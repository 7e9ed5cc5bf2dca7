#!/usr/bin/env python3
"""
tilegen.cli
Turn 4x4 shape sheets into 48-cell connected-texture atlases.

Usage:
  tilegen proc [-j JOBS] [-p PAD] [-b BLEED] [--layout PNG] [--debug] FILE...
  tilegen mapping

Commands:
  proc    : Write <prefix>-tiled.png next to every input FILE.
  mapping : Print the neighbour bitmask -> atlas cell table (16x16, row = high nibble).

Input:
  Square PNG whose side is divisible by 4. Decoded as 8-bit RGBA.

Output:
  PNG atlas of 12x4 cells, each cell_size + 2*PAD wide. BLEED rings of each
  border repeat the cell's edge pixels (BLEED <= PAD).

Notes:
  Files are independent and run on a thread pool. A bad file is reported
  and skipped; the exit status is non-zero if any file failed.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from . import __version__
from .batch import process_files
from .bleed import check_bleed
from .core_types import rgba_to_hex, unpack_rgba
from .errors import LayoutError, PaddingError
from .layout import ReferenceLayout, build_reference_layout, load_reference_layout
from .mapping import format_mapping_table
from .palette import palette_collisions
from .utils import (
    enable_line_buffered_stdout,
    error,
    print_config_line,
    warn,
)

# CLI args & small helpers


def _default_jobs() -> int:
    """One job per available CPU."""
    return os.cpu_count() or 1


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _positive_int(text: str) -> int:
    value = _non_negative_int(text)
    if value == 0:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilegen",
        description="Convert 4x4 shape sheets into 48-cell connected-texture atlases.",
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    sub = parser.add_subparsers(dest="cmd", required=True, metavar="COMMAND")

    proc = sub.add_parser("proc", help="Process input files")
    proc.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        default=None,
        help="Files processed in parallel (default: CPU count)",
    )
    proc.add_argument(
        "-p", "--pad", type=_non_negative_int, default=0, help="Padding amount, in pixels"
    )
    proc.add_argument(
        "-b",
        "--bleed",
        type=_non_negative_int,
        default=0,
        help="Bleeding amount, in pixels less or equal to padding amount",
    )
    proc.add_argument(
        "--layout",
        default=None,
        help="Replacement 384x128 reference layout PNG (default: built-in)",
    )
    proc.add_argument("--debug", action="store_true", help="Verbose per-file details")
    proc.add_argument("files", nargs="+", help="The .png files")

    sub.add_parser("mapping", help="Print out bitmask index mapping")
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse argv; help, version and usage errors exit through argparse."""
    return build_parser().parse_args(argv)


def _load_layout(path: Optional[str]) -> ReferenceLayout:
    if path is None:
        return build_reference_layout()
    layout = load_reference_layout(path)
    for key, shapes in palette_collisions(layout).items():
        warn(
            f"layout colour {rgba_to_hex(unpack_rgba(key))} probes shapes {shapes}; "
            f"using {shapes[-1]}"
        )
    return layout


# Commands


def run_proc(args: argparse.Namespace) -> int:
    try:
        check_bleed(args.pad, args.bleed)
    except PaddingError as e:
        error(str(e))
        return 1

    jobs = args.jobs or _default_jobs()
    print_config_line(
        "run",
        [
            ("CPU cores", os.cpu_count() or 1),
            ("Jobs", jobs),
            ("Pad", args.pad),
            ("Bleed", args.bleed),
            ("Files", len(args.files)),
        ],
        debug=args.debug,
    )

    try:
        layout = _load_layout(args.layout)
    except LayoutError as e:
        error(str(e))
        return 1

    result = process_files(
        args.files, layout, args.pad, args.bleed, jobs=jobs, debug=args.debug
    )
    print("".join(result.logs), end="", flush=True)

    if not result.ok:
        for failure in result.failures:
            error(failure.describe())
        return 1
    return 0


def run_mapping() -> int:
    print(format_mapping_table(), flush=True)
    return 0


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    if not (sys.argv[1:] if argv is None else argv):
        # bare run: show help rather than a usage error
        print(build_parser().format_help(), end="", flush=True)
        return 0
    args = parse_cli_args(argv)
    if args.cmd == "mapping":
        return run_mapping()
    return run_proc(args)


if __name__ == "__main__":
    sys.exit(main())
