"""
shape_codec.py - Shape string decoder for Conway's Game of Life

This module turns the compact run-length shape format into rectangular
boolean matrices that a Board can stamp.

Format:
    Lines are separated by '\\n'. Each line is a sequence of runs, and each
    run is a state character ('D' dead, 'L' live) followed by a decimal
    count, e.g. "D2L1D2".

    The width is the sum of every number found on the first line. The
    height is the number of lines plus one; the extra bottom row is always
    dead. Existing shape data depends on that extra row, so it is kept.

Example:
    >>> shape = decode("D5\\nD2L1D2\\nD3L1D1\\nD1L3D1\\nD5")
    >>> shape.width, shape.height
    (5, 6)
"""

import re
import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .errors import ErrorKind, LifeError

# Module logger
_logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"
DEAD = "D"
LIVE = "L"

# ASCII digits only: str.isdigit() would also accept superscripts
DIGIT_RUN = re.compile(r"[0-9]+")


# Custom exceptions
class ShapeDecodeError(LifeError):
    """Base class for failures while decoding a shape string"""

    def __init__(self, message: str, *, row: int, line: str, **context):
        self.row = row
        self.line = line
        super().__init__(message, {"row": row, "line": line, **context})


class InvalidStateChar(ShapeDecodeError):
    """Raised when a run does not start with 'D' or 'L'"""
    kind = ErrorKind.INVALID_STATE_CHAR

    def __init__(self, char: str, *, row: int, line: str, column: int):
        self.char = char
        self.column = column
        super().__init__(
            f"Expected '{DEAD}' or '{LIVE}' but found {char!r}",
            row=row, line=line, char=char, column=column,
        )


class InvalidRepetitionCount(ShapeDecodeError):
    """Raised when a state character is not followed by a usable count"""
    kind = ErrorKind.INVALID_REPETITION_COUNT

    def __init__(self, count_text: str, *, row: int, line: str, column: int,
                 reason: str = ""):
        self.count_text = count_text
        self.column = column
        if reason:
            message = reason
        elif count_text:
            message = f"Repetition count must be positive, got {count_text}"
        else:
            message = "State character is not followed by a repetition count"
        super().__init__(message, row=row, line=line, count=count_text, column=column)


class WidthMismatch(ShapeDecodeError):
    """Raised when a line does not cover exactly the declared width"""
    kind = ErrorKind.WIDTH_MISMATCH

    def __init__(self, expected: int, actual: int, *, row: int, line: str):
        self.expected = expected
        self.actual = actual
        if expected == 0 and row == 0:
            message = "First line declares no cells"
        else:
            message = f"Row {row} spans {actual} cells, expected {expected}"
        super().__init__(message, row=row, line=line, expected=expected, actual=actual)


class HeightMismatch(ShapeDecodeError):
    """Raised when the rows consumed disagree with the derived height"""
    kind = ErrorKind.HEIGHT_MISMATCH

    def __init__(self, expected: int, actual: int, *, line: str = ""):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Shape spans {actual} rows, expected {expected}",
            row=actual, line=line, expected=expected, actual=actual,
        )


@dataclass(frozen=True, eq=False)
class DecodedShape:
    """
    Immutable result of decoding a shape string.

    Attributes:
        width (int): Number of columns
        height (int): Number of rows
        matrix (numpy.ndarray): Read-only (height, width) boolean array
    """
    width: int
    height: int
    matrix: np.ndarray

    def __post_init__(self):
        matrix = np.array(self.matrix, dtype=bool)
        if matrix.shape != (self.height, self.width):
            raise ValueError(
                f"matrix shape {matrix.shape} does not match "
                f"{self.height}x{self.width}"
            )
        # Private copy, so the caller's array stays writable
        matrix.flags.writeable = False
        object.__setattr__(self, "matrix", matrix)

    @property
    def live_count(self) -> int:
        return int(np.count_nonzero(self.matrix))

    def rows(self) -> List[List[bool]]:
        """Return the matrix as nested lists of bools, row-major."""
        return [[bool(cell) for cell in row] for row in self.matrix]

    def live_cells(self) -> List[Tuple[int, int]]:
        """Return (x, y) coordinates of live cells, row by row."""
        ys, xs = np.nonzero(self.matrix)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodedShape):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and \
            bool(np.array_equal(self.matrix, other.matrix))

    __hash__ = None

    def __repr__(self) -> str:
        return f"DecodedShape(width={self.width}, height={self.height}, live_cells={self.live_count})"


def derive_width(first_line: str) -> int:
    """Sum every run of digits on the line; anything else separates them."""
    return sum(int(digits) for digits in DIGIT_RUN.findall(first_line))


def derive_height(lines: List[str]) -> int:
    """Height is one more than the number of lines."""
    return len(lines) + 1


def _scan_line(row: int, line: str, width: int) -> List[Tuple[int, int]]:
    """
    Validate one line of runs and return its live runs as (start, count).
    """
    live_runs: List[Tuple[int, int]] = []
    column = 0
    pos = 0
    while pos < len(line):
        state = line[pos]
        if state not in (DEAD, LIVE):
            raise InvalidStateChar(state, row=row, line=line, column=pos)
        pos += 1

        match = DIGIT_RUN.match(line, pos)
        if match is None:
            raise InvalidRepetitionCount("", row=row, line=line, column=pos)
        count = int(match.group())
        if count <= 0:
            raise InvalidRepetitionCount(match.group(), row=row, line=line, column=pos)
        pos = match.end()

        if state == LIVE:
            live_runs.append((column, count))
        column += count

    if column != width:
        raise WidthMismatch(width, column, row=row, line=line)
    return live_runs


def _allocate(height: int, width: int, first_line: str) -> np.ndarray:
    """All-dead matrix for a shape whose lines have already been validated."""
    try:
        return np.zeros((height, width), dtype=bool)
    except (ValueError, OverflowError, MemoryError) as e:
        raise InvalidRepetitionCount(
            str(width), row=0, line=first_line, column=0,
            reason=f"A {width}x{height} shape is too large to allocate",
        ) from e


def decode(data: str) -> DecodedShape:
    """
    Decode a run-length shape string.

    Every line is validated before the matrix is allocated, so a malformed
    string is rejected however large its counts are.

    Args:
        data: Encoded shape, lines separated by '\\n'

    Returns:
        DecodedShape with a fully populated matrix

    Raises:
        TypeError: If data is not a string
        InvalidStateChar: If a run starts with anything but 'D' or 'L'
        InvalidRepetitionCount: If a run has no count or a zero count, or the
            counts describe a shape too large to hold in memory
        WidthMismatch: If a line does not span exactly the declared width
        HeightMismatch: If the consumed rows disagree with the derived height
    """
    if not isinstance(data, str):
        raise TypeError(f"Shape data must be a string, got {type(data).__name__}")

    lines = data.split(LINE_SEPARATOR)
    width = derive_width(lines[0])
    height = derive_height(lines)
    if width <= 0:
        raise WidthMismatch(0, 0, row=0, line=lines[0])

    runs: List[Tuple[int, int, int]] = []
    row = 0
    for line in lines:
        runs.extend((row, start, count) for start, count in _scan_line(row, line, width))
        row += 1

    # Account for the trailing row implied by the format
    row += 1
    if row != height:
        raise HeightMismatch(height, row, line=lines[-1])

    matrix = _allocate(height, width, lines[0])
    for run_row, start, count in runs:
        matrix[run_row, start:start + count] = True

    shape = DecodedShape(width=width, height=height, matrix=matrix)
    _logger.debug("Decoded %dx%d shape with %d live cells", width, height, shape.live_count)
    return shape
