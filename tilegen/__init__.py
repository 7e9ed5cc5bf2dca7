"""
tilegen package.

Purpose:
  Turn a 4x4 shape sheet into a 48-cell connected-texture atlas. See tilegen.cli for the CLI.

Public API:
  build_reference_layout : built-in 384x128 layout (build once, share read-only)
  load_reference_layout  : replacement layout from a PNG
  build_palette          : layout colour -> source shape offset
  remap_cells            : source sheet -> padded atlas interior
  bleed_edges            : fill pad borders in place
  process_file           : one file end-to-end
  process_files          : many files on a thread pool, failures collected

Quick start:
  from tilegen import build_reference_layout, process_files
  layout = build_reference_layout()
  result = process_files(["grass.png"], layout, pad=2, bleed=2)
"""

__version__ = "0.1.0"

from . import constants  # noqa: E402,F401
from . import core_types  # noqa: E402,F401
from . import errors  # noqa: E402,F401
from . import utils  # noqa: E402,F401

from .layout import (  # noqa: E402
    ReferenceLayout,
    build_reference_layout,
    load_reference_layout,
)
from .palette import build_palette  # noqa: E402
from .remap import remap_cells, validate_source_dimensions  # noqa: E402
from .bleed import bleed_edges  # noqa: E402
from .batch import BatchResult, process_file, process_files  # noqa: E402
from .mapping import cell_for_bitmask, format_mapping_table  # noqa: E402

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "utils",
    "ReferenceLayout",
    "build_reference_layout",
    "load_reference_layout",
    "build_palette",
    "remap_cells",
    "validate_source_dimensions",
    "bleed_edges",
    "BatchResult",
    "process_file",
    "process_files",
    "cell_for_bitmask",
    "format_mapping_table",
]
