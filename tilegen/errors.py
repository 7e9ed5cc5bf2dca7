# tilegen/errors.py
from __future__ import annotations

"""
Exception taxonomy.

Precondition and setup errors abort a run before any file is processed.
Dimension errors are raised per file and collected by the batch dispatcher.
"""


class TilegenError(Exception):
    """Base class for errors raised by tilegen itself."""


class DimensionError(TilegenError, ValueError):
    """Source image dimensions the remapper cannot use."""

    reason = "is invalid"

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        super().__init__(
            f"image dimension ({self.width}, {self.height}) {self.reason}"
        )


class IndivisibleBy4Error(DimensionError):
    reason = "is indivisible by 4"


class NotSquareError(DimensionError):
    reason = "is not square"


class PaddingError(TilegenError, ValueError):
    """Pad or bleed amounts that cannot be used."""


class NegativeAmountError(PaddingError):
    def __init__(self, pad: int, bleed: int) -> None:
        self.pad = int(pad)
        self.bleed = int(bleed)
        super().__init__(
            f"pad and bleed must be >= 0, got pad={self.pad}, bleed={self.bleed}"
        )


class BleedExceedsPadError(PaddingError):
    def __init__(self, pad: int, bleed: int) -> None:
        self.pad = int(pad)
        self.bleed = int(bleed)
        super().__init__("--bleed may not be greater than --pad")


class LayoutError(TilegenError):
    """Reference layout could not be loaded or has the wrong size."""


__all__ = [
    "TilegenError",
    "DimensionError",
    "IndivisibleBy4Error",
    "NotSquareError",
    "PaddingError",
    "NegativeAmountError",
    "BleedExceedsPadError",
    "LayoutError",
]
