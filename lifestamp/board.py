"""
board.py - Grid Management Module for Conway's Game of Life

This module defines the Board class which owns the grid state: reset,
random seeding, stepping, single-cell edits and shape placement.
"""

from typing import Optional, TypedDict
import logging
import numpy as np

from .errors import ErrorKind, LifeError
from . import rules
from .shape_codec import DecodedShape, decode

# Module logger
_logger = logging.getLogger(__name__)

# Probability that a cell starts alive after set_random_state()
RANDOM_ALIVE_PROBABILITY = 0.5


# Custom exceptions
class InvalidDimensions(LifeError):
    """Raised when invalid grid dimensions are provided"""
    kind = ErrorKind.INVALID_DIMENSIONS


class OutOfBounds(LifeError):
    """Raised when cell coordinates fall outside the grid"""
    kind = ErrorKind.OUT_OF_BOUNDS


class DoesNotFit(LifeError):
    """Raised when a shape placed at an origin would cross the grid edge"""
    kind = ErrorKind.DOES_NOT_FIT


class BoardStats(TypedDict):
    generation: int
    width: int
    height: int
    live_cells: int
    dead_cells: int
    density: float
    total_cells: int


def validate_dimensions(width: int, height: int) -> None:
    """Raise InvalidDimensions unless both values are positive integers."""
    for name, value in (("width", width), ("height", height)):
        # bool is an int subclass but never a dimension
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensions(
                f"Grid {name} must be an integer", {name: value}
            )
        if value <= 0:
            raise InvalidDimensions(
                f"Grid {name} must be a positive integer", {name: value}
            )


class Board:
    """
    Manages the Game of Life grid state and operations.

    The grid is a (height, width) boolean array indexed [y, x]. Width and
    height are read from the grid itself, so replacing the grid in
    init_cells() changes all three in a single assignment.

    Callers must serialize mutating calls; the board does no locking.

    Attributes:
        grid (numpy.ndarray): 2D boolean array (False=dead, True=alive)
        generation (int): Number of steps since the last reset
    """

    def __init__(self, width: int, height: int, *, rng: Optional[np.random.Generator] = None):
        """
        Initialize a new all-dead board with the specified dimensions.
        """
        self._rng = rng if rng is not None else np.random.default_rng()
        self.grid = np.zeros((0, 0), dtype=bool)
        self.generation = 0
        self.init_cells(width, height)

    @classmethod
    def from_config(cls, config, *, rng: Optional[np.random.Generator] = None) -> "Board":
        """Build a board sized to the cell grid of a CanvasConfig."""
        return cls(config.cells_x, config.cells_y, rng=rng)

    @property
    def width(self) -> int:
        return self.grid.shape[1]

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def init_cells(self, width: int, height: int) -> None:
        """
        Replace the grid with an all-dead grid of the given size.

        This is the only way to change dimensions; prior content is
        discarded. The old grid stays intact until the new one is built.

        Raises:
            InvalidDimensions: If width or height is not a positive integer
        """
        validate_dimensions(width, height)
        new_grid = np.zeros((int(height), int(width)), dtype=bool)
        self.grid = new_grid
        self.generation = 0
        _logger.debug("Initialized board: %dx%d", width, height)

    def clear(self) -> None:
        """Kill every cell and reset the generation counter."""
        self.grid = np.zeros_like(self.grid)
        self.generation = 0
        _logger.debug("Grid cleared")

    def set_random_state(self, *, seed: Optional[int] = None) -> None:
        """
        Redraw every cell independently, alive with probability 0.5.

        Args:
            seed: Optional RNG seed; when given, a fresh generator is used for
                this call only and the board's own generator is left alone.
        """
        rng = np.random.default_rng(seed) if seed is not None else self._rng
        self.grid = rng.random((self.height, self.width)) < RANDOM_ALIVE_PROBABILITY
        _logger.debug("Grid randomized (seed=%s)", "None" if seed is None else str(seed))

    # -----------------------------
    # Simulation
    # -----------------------------
    def step(self) -> None:
        """
        Advance the simulation by one generation using Conway's rules.

        Edges do not wrap. The next generation is computed into a new array
        and swapped in once complete.
        """
        self.grid = rules.next_generation(self.grid)
        self.generation += 1

    def count_neighbors(self, x: int, y: int) -> int:
        """
        Count live neighbors of (x, y) against the current grid.

        Raises:
            OutOfBounds: If (x, y) is outside the grid
        """
        self._check_bounds(x, y)
        return rules.moore_neighborhood(self.grid, x, y)

    # -----------------------------
    # Cell ops
    # -----------------------------
    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(
                f"Coordinate ({x}, {y}) is outside grid boundaries "
                f"({self.width}x{self.height})",
                {"x": x, "y": y, "width": self.width, "height": self.height},
            )

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """
        Set the state of a specific cell.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)
            alive: True for alive, False for dead
        """
        self._check_bounds(x, y)
        self.grid[y, x] = bool(alive)

    def is_alive(self, x: int, y: int) -> bool:
        """Return the state of a specific cell."""
        self._check_bounds(x, y)
        return bool(self.grid[y, x])

    # -----------------------------
    # Shapes
    # -----------------------------
    def place_shape(self, shape: DecodedShape, origin_x: int, origin_y: int) -> None:
        """
        Copy a decoded shape into the grid with its top-left at the origin.

        Every cell of the target rectangle is overwritten, so dead cells in
        the shape clear live cells underneath.

        Raises:
            DoesNotFit: If the shape would cross the grid edge. The grid is
                left untouched.
        """
        if (origin_x < 0 or origin_y < 0
                or origin_x + shape.width > self.width
                or origin_y + shape.height > self.height):
            raise DoesNotFit(
                f"{shape.width}x{shape.height} shape at ({origin_x}, {origin_y}) "
                f"does not fit a {self.width}x{self.height} grid",
                {
                    "origin_x": origin_x,
                    "origin_y": origin_y,
                    "shape_width": shape.width,
                    "shape_height": shape.height,
                },
            )
        self.grid[origin_y:origin_y + shape.height,
                  origin_x:origin_x + shape.width] = shape.matrix
        _logger.debug("Placed %dx%d shape at (%d, %d)",
                      shape.width, shape.height, origin_x, origin_y)

    def stamp(self, data: str, origin_x: int, origin_y: int) -> DecodedShape:
        """
        Decode an encoded shape string and place it at the origin.

        Returns:
            The decoded shape

        Raises:
            ShapeDecodeError: If the string does not decode
            DoesNotFit: If the decoded shape does not fit at the origin
        """
        shape = decode(data)
        self.place_shape(shape, origin_x, origin_y)
        return shape

    # -----------------------------
    # Stats
    # -----------------------------
    def live_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_empty(self) -> bool:
        return not self.grid.any()

    def get_statistics(self) -> BoardStats:
        """
        Get statistics about the current grid state.
        """
        total = self.width * self.height
        live_cells = self.live_count()
        dead_cells = total - live_cells
        density = (live_cells / total) if total else 0.0

        return {
            'generation': self.generation,
            'width': self.width,
            'height': self.height,
            'live_cells': live_cells,
            'dead_cells': dead_cells,
            'density': density,
            'total_cells': total
        }

    def __str__(self) -> str:
        """String representation of the board"""
        return (f"Board({self.width}x{self.height}, "
                f"generation={self.generation}, "
                f"live_cells={self.live_count()})")

    def __repr__(self) -> str:
        """Technical representation of the board"""
        return f"Board(width={self.width}, height={self.height}, generation={self.generation})"
