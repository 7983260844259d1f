"""
lifestamp - Conway's Game of Life with run-length encoded shape stamping.
"""

from .errors import ErrorKind, LifeError
from .board import Board, BoardStats, DoesNotFit, InvalidDimensions, OutOfBounds
from .shape_codec import (
    DecodedShape,
    HeightMismatch,
    InvalidRepetitionCount,
    InvalidStateChar,
    ShapeDecodeError,
    WidthMismatch,
    decode,
)
from .shapes import ShapeCatalog, ShapeCatalogError, ShapeChoice
from .result import Result, attempt
from .config import CanvasConfig

__all__ = [
    "Board",
    "BoardStats",
    "CanvasConfig",
    "DecodedShape",
    "DoesNotFit",
    "ErrorKind",
    "HeightMismatch",
    "InvalidDimensions",
    "InvalidRepetitionCount",
    "InvalidStateChar",
    "LifeError",
    "OutOfBounds",
    "Result",
    "ShapeCatalog",
    "ShapeCatalogError",
    "ShapeChoice",
    "ShapeDecodeError",
    "WidthMismatch",
    "attempt",
    "decode",
]
