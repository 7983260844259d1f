"""
rules.py - Evolution rules for Conway's Game of Life

This module implements neighbor counting over a bounded (non-wrapping) grid
and Conway's B3/S23 transition, both per cell and for a whole grid at once.
"""

from typing import Callable
import logging
from functools import wraps
from time import perf_counter
import numpy as np

# Module logger (consistent with board.py)
_logger = logging.getLogger(__name__)

# Offsets of the Moore neighborhood, center excluded
MOORE_OFFSETS = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def timing_decorator(func: Callable) -> Callable:
    """
    Decorator to log execution time of evolution functions.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = perf_counter()
        result = func(*args, **kwargs)
        elapsed = perf_counter() - start
        _logger.debug("%s executed in %.4f seconds", func.__name__, elapsed)
        return result
    return wrapper


def moore_neighborhood(grid: np.ndarray, x: int, y: int) -> int:
    """
    Count live cells among the up-to-8 cells surrounding (x, y).

    Cells outside the grid do not exist: they are neither counted nor
    wrapped around to the opposite edge.

    Args:
        grid: 2D boolean array indexed [y, x]
        x: X coordinate of center cell
        y: Y coordinate of center cell

    Returns:
        Count of live neighbors in [0, 8]
    """
    height, width = grid.shape
    live_count = 0
    for dx, dy in MOORE_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height and grid[ny, nx]:
            live_count += 1
    return live_count


def neighbor_counts(grid: np.ndarray) -> np.ndarray:
    """
    Compute the live neighbor count of every cell in one pass.

    The grid is framed with one ring of dead cells, then the 8 shifted
    views of the framed grid are summed. The frame stands in for the
    cells beyond the edge, which do not exist and so never count.
    """
    H, W = grid.shape
    framed = np.pad(grid.astype(np.uint8), 1, mode="constant", constant_values=0)
    counts = np.zeros((H, W), dtype=np.uint8)
    for dx, dy in MOORE_OFFSETS:
        counts += framed[1 + dy:1 + dy + H, 1 + dx:1 + dx + W]
    return counts


def conway_rules(alive: bool, live_neighbors: int) -> bool:
    """
    Conway's original Game of Life rules.

    Rules:
    1. Underpopulation: Live cell with <2 neighbors dies
    2. Survival: Live cell with 2-3 neighbors lives
    3. Overpopulation: Live cell with >3 neighbors dies
    4. Reproduction: Dead cell with exactly 3 neighbors becomes alive
    """
    if alive:
        return live_neighbors in (2, 3)
    return live_neighbors == 3


@timing_decorator
def next_generation(grid: np.ndarray) -> np.ndarray:
    """
    Return the next generation of `grid` as a new boolean array.

    The input is only read; the result is written into a separate buffer.
    """
    neighbors = neighbor_counts(grid)
    alive = grid.astype(bool, copy=False)
    survive = alive & ((neighbors == 2) | (neighbors == 3))
    born = ~alive & (neighbors == 3)
    return survive | born
