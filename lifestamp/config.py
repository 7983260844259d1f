# config.py
"""
Canvas configuration for the simulator.
The grid size is derived from a pixel canvas divided by a cell size.
"""

from __future__ import annotations
from dataclasses import dataclass

from .board import InvalidDimensions, validate_dimensions

DEFAULT_CANVAS_WIDTH = 500
DEFAULT_CANVAS_HEIGHT = 500
DEFAULT_CELL_SIZE = 10
DEFAULT_FPS = 1.0


@dataclass(frozen=True, slots=True)
class CanvasConfig:
    """Pixel canvas size, cell size and frame rate of a simulation."""
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    cell_size: int = DEFAULT_CELL_SIZE
    fps: float = DEFAULT_FPS
    random_start: bool = True

    def __post_init__(self):
        validate_dimensions(self.canvas_width, self.canvas_height)
        if isinstance(self.cell_size, bool) or not isinstance(self.cell_size, int) or self.cell_size <= 0:
            raise InvalidDimensions("cell_size must be a positive integer",
                                    {"cell_size": self.cell_size})
        if self.canvas_width % self.cell_size != 0:
            raise InvalidDimensions(
                "cell_size leaves a remainder on canvas_width",
                {"canvas_width": self.canvas_width, "cell_size": self.cell_size},
            )
        if self.canvas_height % self.cell_size != 0:
            raise InvalidDimensions(
                "cell_size leaves a remainder on canvas_height",
                {"canvas_height": self.canvas_height, "cell_size": self.cell_size},
            )
        if self.fps <= 0:
            raise ValueError("fps must be > 0")

    @property
    def cells_x(self) -> int:
        return self.canvas_width // self.cell_size

    @property
    def cells_y(self) -> int:
        return self.canvas_height // self.cell_size

    @property
    def frame_delay(self) -> float:
        """Seconds between generations."""
        return 1.0 / self.fps

    @classmethod
    def from_args(cls, args) -> "CanvasConfig":
        """Build a config from the argparse namespace of the CLI."""
        return cls(
            canvas_width=args.canvas_width,
            canvas_height=args.canvas_height,
            cell_size=args.cell_size,
            fps=args.fps,
            random_start=args.shape is None,
        )
