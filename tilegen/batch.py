# tilegen/batch.py
from __future__ import annotations

"""
Batch dispatcher.

Runs decode -> validate -> palette -> remap -> bleed -> encode -> write for
each file on a thread pool. A failing file is recorded as a FileFailure and
never stops the others. Per-file log output is buffered and returned in
submission order.
"""

import io
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from .bleed import bleed_edges, check_bleed
from .core_types import AtlasGeometry, FileFailure, PathLike
from .image_io import load_png_rgba, output_path_for, save_png_rgba
from .layout import ReferenceLayout
from .palette import build_palette
from .remap import remap_cells, validate_source_dimensions
from .utils import (
    debug_log,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
)


@dataclass
class BatchResult:
    """Outcome of a batch: files written, files failed, and per-file log text."""

    written: List[Path] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def message(self) -> str:
        """All failure reasons, one per line; empty on success."""
        return "\n".join(f.describe() for f in self.failures)


# (path, written path or None, failure or None, captured log text)
Outcome = Tuple[Path, Optional[Path], Optional[FileFailure], str]


def process_file(
    path: PathLike,
    layout: ReferenceLayout,
    pad: int = 0,
    bleed: int = 0,
    *,
    debug: bool = False,
    stream: Optional[TextIO] = None,
) -> Path:
    """
    Process one shape sheet end-to-end and return the written atlas path.

    Nothing is written unless the whole atlas was built and encoded.
    """
    src_path = Path(path)
    t_start = time.perf_counter()

    source = load_png_rgba(src_path)
    height, width = int(source.shape[0]), int(source.shape[1])
    cell_size = validate_source_dimensions(width, height)
    geom = AtlasGeometry(cell_size=cell_size, pad=pad)
    t_loaded = time.perf_counter()

    palette = build_palette(layout, cell_size)
    atlas = remap_cells(source, palette, layout, pad)
    bleed_edges(atlas, geom, bleed)
    t_built = time.perf_counter()

    out_path = save_png_rgba(output_path_for(src_path), atlas)
    t_saved = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Cell", cell_size),
                    ("Palette", len(palette)),
                    ("Pad", pad),
                    ("Bleed", bleed),
                ]
            ),
            stream=stream,
        )
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"build={format_seconds_compact(t_built - t_loaded)}, "
            f"save={format_seconds_compact(t_saved - t_built)})",
            stream=stream,
        )
    log(f"Wrote {out_path.name} | size={geom.width}x{geom.height}", stream=stream)
    return out_path


def _process_one_captured(
    path: Path,
    layout: ReferenceLayout,
    pad: int,
    bleed: int,
    debug: bool,
) -> Outcome:
    """Run process_file with its own log buffer; any failure becomes a FileFailure."""
    buf = io.StringIO()
    print_banner(path.name, stream=buf)
    try:
        written = process_file(path, layout, pad, bleed, debug=debug, stream=buf)
    except Exception as e:
        if debug:
            debug_log(f"failed: {e}", stream=buf)
        return path, None, FileFailure(path=path, error=e), buf.getvalue()
    return path, written, None, buf.getvalue()


def _fold(acc: BatchResult, outcome: Outcome) -> BatchResult:
    _path, written, failure, text = outcome
    if written is not None:
        acc.written.append(written)
    if failure is not None:
        acc.failures.append(failure)
    acc.logs.append(text)
    return acc


def process_files(
    paths: Iterable[PathLike],
    layout: ReferenceLayout,
    pad: int = 0,
    bleed: int = 0,
    *,
    jobs: Optional[int] = None,
    debug: bool = False,
) -> BatchResult:
    """
    Process every path on a pool of `jobs` threads (None: executor default).

    Raises a PaddingError before any file is opened when bleed > pad or
    either amount is negative.
    """
    check_bleed(pad, bleed)
    files = [Path(p) for p in paths]

    with ThreadPoolExecutor(max_workers=jobs) as ex:
        futures = [
            ex.submit(_process_one_captured, p, layout, pad, bleed, debug)
            for p in files
        ]
        outcomes = [f.result() for f in futures]

    return reduce(_fold, outcomes, BatchResult())


__all__ = ["BatchResult", "process_file", "process_files"]
