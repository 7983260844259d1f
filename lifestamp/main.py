"""
main.py - Conway's Game of Life Simulator

Main orchestrator module that integrates all components:
- Board management
- Shape decoding and stamping
- Canvas configuration
- Console rendering and command line interface
"""

import argparse
import logging
import sys
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .board import Board
from .config import (
    CanvasConfig,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CELL_SIZE,
    DEFAULT_FPS,
)
from .errors import LifeError
from .result import Result, attempt
from .shapes import ShapeCatalog, ShapeCatalogError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Install the console (and optional file) handlers for a CLI run."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, handlers=handlers, force=True)


def render_board(board: Board, symbols: Tuple[str, str] = (".", "#")) -> str:
    """
    Render the board as framed text.

    Args:
        board: Board to draw
        symbols: Tuple of (dead_symbol, live_symbol)
    """
    dead_char, live_char = symbols
    if not dead_char or not live_char:
        raise ValueError("symbols must be non-empty strings")

    lines = [f"Generation: {board.generation} | Grid: {board.width}x{board.height}"]
    lines.append('┌' + '─' * board.width + '┐')
    for y in range(board.height):
        row = ''.join(live_char if board.is_alive(x, y) else dead_char
                      for x in range(board.width))
        lines.append('│' + row + '│')
    lines.append('└' + '─' * board.width + '┘')
    return "\n".join(lines)


class LifeSimulator:
    """
    Main orchestrator class for the simulation.
    Every editing operation returns a Result instead of raising.
    """

    def __init__(self, config: Optional[CanvasConfig] = None,
                 catalog: Optional[ShapeCatalog] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the simulator.

        Args:
            config: Canvas configuration (defaults to a 500x500 canvas of 10px cells)
            catalog: Shapes available to stamp (defaults to the built-in set)
            rng: Random generator handed to the board
        """
        self.config = config if config is not None else CanvasConfig()
        self.catalog = catalog if catalog is not None else ShapeCatalog.builtin()
        self.board = Board.from_config(self.config, rng=rng)
        self.is_running = False

        # Last generation only, used to detect a still board
        self._previous: Optional[np.ndarray] = None

        self.simulation_stats = {
            "total_generations": 0,
            "shapes_stamped": 0,
            "resets": 0,
        }

        _logger.info("Initialized simulator (%dx%d cells)", self.board.width, self.board.height)

    # -----------------------------
    # Board lifecycle
    # -----------------------------
    def randomize(self, seed: Optional[int] = None) -> None:
        self.board.set_random_state(seed=seed)
        self._previous = None
        _logger.info("Board randomized")

    def clear(self) -> None:
        self.board.clear()
        self._previous = None
        self.simulation_stats["resets"] += 1
        _logger.info("Board cleared")

    def resize(self, width: int, height: int) -> Result[None]:
        """Reallocate the grid. Current cells are discarded."""
        result = attempt(self.board.init_cells, width, height)
        if result.ok:
            self._previous = None
            self.simulation_stats["resets"] += 1
            _logger.info("Board resized to %dx%d", width, height)
        else:
            _logger.error("Failed to resize board: %s", result.error)
        return result

    # -----------------------------
    # Editing
    # -----------------------------
    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        """Clamp coordinates into [0, width-1] x [0, height-1]."""
        return (min(max(x, 0), self.board.width - 1),
                min(max(y, 0), self.board.height - 1))

    def draw(self, x: int, y: int) -> Result[None]:
        return attempt(self.board.set_cell, *self.clamp(x, y), True)

    def erase(self, x: int, y: int) -> Result[None]:
        return attempt(self.board.set_cell, *self.clamp(x, y), False)

    def stamp_data(self, data: str, x: int, y: int) -> Result:
        """Decode an encoded shape string and stamp it at (x, y)."""
        result = attempt(self.board.stamp, data, x, y)
        if result.ok:
            self.simulation_stats["shapes_stamped"] += 1
            _logger.info("Stamped %r at (%d, %d)", result.value, x, y)
        else:
            _logger.warning("Shape not stamped: %s", result.error)
        return result

    def stamp_shape(self, shape_id: str, x: int, y: int) -> Result:
        """
        Stamp a catalogue shape at (x, y).

        Raises:
            KeyError: If the catalogue has no such shape
        """
        return self.stamp_data(self.catalog.get(shape_id).data, x, y)

    # -----------------------------
    # Simulation
    # -----------------------------
    def evolve_generation(self) -> None:
        """
        Evolve the board by one generation.
        """
        self._previous = self.board.grid
        self.board.step()
        self.simulation_stats["total_generations"] += 1

    def _is_stable_state(self) -> bool:
        """
        True if the current grid equals the previous generation.
        """
        if self._previous is None:
            return False
        return bool(np.array_equal(self.board.grid, self._previous))

    def run_simulation(self, generations: int,
                       display: Optional[Callable[[str], None]] = None,
                       delay: float = 0.0) -> int:
        """
        Run the simulation for a number of generations.

        Args:
            generations: Number of generations to simulate
            display: Called with the rendered board after each generation
            delay: Seconds to wait between generations

        Returns:
            Number of generations actually evolved
        """
        if generations < 0:
            raise ValueError("generations must be non-negative")

        _logger.info("Starting simulation for %d generations", generations)
        self.is_running = True
        evolved = 0

        try:
            for _ in range(generations):
                if not self.is_running:
                    break

                self.evolve_generation()
                evolved += 1

                if display is not None:
                    display(render_board(self.board))
                if self._is_stable_state():
                    _logger.info("Stable state reached, stopping simulation")
                    break
                if delay:
                    time.sleep(delay)

        except KeyboardInterrupt:
            _logger.info("Simulation interrupted by user")
        finally:
            self.is_running = False
            _logger.info("Simulation completed after %d generations", evolved)

        return evolved

    def get_simulation_info(self) -> Dict[str, Any]:
        """
        Get comprehensive simulation information.
        """
        return {
            "board_dimensions": f"{self.board.width}x{self.board.height}",
            "current_generation": self.board.generation,
            "cell_size": self.config.cell_size,
            "fps": self.config.fps,
            "board_statistics": self.board.get_statistics(),
            "simulation_statistics": dict(self.simulation_stats),
            "available_shapes": self.catalog.ids(),
        }


def print_banner() -> None:
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("        CONWAY'S GAME OF LIFE SIMULATOR")
    print("=" * 60)
    print("Available commands:")
    print("  random          - Fill the board randomly")
    print("  clear           - Kill every cell")
    print("  step            - Evolve one generation")
    print("  run <gens>      - Run simulation for N generations")
    print("  draw <x> <y>    - Bring a cell to life")
    print("  erase <x> <y>   - Kill a cell")
    print("  stamp <id> <x> <y> - Stamp a shape with its top-left at (x, y)")
    print("  shapes          - List available shapes")
    print("  resize <w> <h>  - Reallocate the board (discards cells)")
    print("  display         - Show current board")
    print("  info            - Show simulation information")
    print("  quit            - Exit simulator")
    print("=" * 60)


def _report(result: Result, success_message: str) -> None:
    if result.ok:
        print(success_message)
    else:
        print(f"Error: {result.error}")


def interactive_mode(simulator: LifeSimulator) -> None:
    """Run the simulator in interactive mode."""
    print_banner()

    while True:
        try:
            command = input("\n>>> ").strip().split()
            if not command:
                continue

            cmd, params = command[0].lower(), command[1:]

            if cmd in ("quit", "exit"):
                print("Thanks for playing!")
                break

            elif cmd == "random":
                simulator.randomize()
                print(render_board(simulator.board))

            elif cmd == "clear":
                simulator.clear()
                print(render_board(simulator.board))

            elif cmd == "step":
                simulator.evolve_generation()
                print(render_board(simulator.board))

            elif cmd == "run" and len(params) == 1:
                simulator.run_simulation(int(params[0]), display=print,
                                         delay=simulator.config.frame_delay)

            elif cmd in ("draw", "erase") and len(params) == 2:
                x, y = (int(p) for p in params)
                action = simulator.draw if cmd == "draw" else simulator.erase
                _report(action(x, y), render_board(simulator.board))

            elif cmd == "stamp" and len(params) == 3:
                shape_id = params[0]
                if shape_id not in simulator.catalog:
                    print(f"Unknown shape: {shape_id}")
                    print(f"Available shapes: {', '.join(simulator.catalog.ids())}")
                    continue
                x, y = int(params[1]), int(params[2])
                _report(simulator.stamp_shape(shape_id, x, y), render_board(simulator.board))

            elif cmd == "shapes":
                for shape in simulator.catalog:
                    print(f"  {shape.id:<12} {shape.name} ({shape.type})")

            elif cmd == "resize" and len(params) == 2:
                width, height = (int(p) for p in params)
                _report(simulator.resize(width, height), f"Board resized to {width}x{height}")

            elif cmd == "display":
                print(render_board(simulator.board))

            elif cmd == "info":
                info = simulator.get_simulation_info()
                print("\nSimulation Information:")
                print(f"  Board: {info['board_dimensions']}")
                print(f"  Generation: {info['current_generation']}")
                print(f"  Live cells: {info['board_statistics']['live_cells']}")
                print(f"  Density: {info['board_statistics']['density']:.3f}")
                print(f"  Shapes stamped: {info['simulation_statistics']['shapes_stamped']}")

            elif cmd == "help":
                print_banner()

            else:
                print("Unknown command. Type 'help' for available commands.")

        except ValueError as e:
            print(f"Invalid argument: {e}")
        except KeyboardInterrupt:
            print("\nUse 'quit' to exit or 'help' for commands.")


def batch_mode(simulator: LifeSimulator, generations: int,
               shape_id: Optional[str] = None, at: Tuple[int, int] = (0, 0),
               seed: Optional[int] = None) -> int:
    """
    Seed the board (stamp a shape or randomize), then run it.

    Returns:
        Process exit code
    """
    if shape_id is not None:
        if shape_id not in simulator.catalog:
            print(f"Unknown shape: {shape_id}. Available: {', '.join(simulator.catalog.ids())}")
            return 2
        result = simulator.stamp_shape(shape_id, *at)
        if not result.ok:
            print(f"Failed to stamp {shape_id}: {result.error}")
            return 1
    elif simulator.config.random_start:
        simulator.randomize(seed=seed)

    print("Initial state:")
    print(render_board(simulator.board))
    simulator.run_simulation(generations, display=print, delay=simulator.config.frame_delay)

    info = simulator.get_simulation_info()
    print("\nSimulation completed:")
    print(f"  Final generation: {info['current_generation']}")
    print(f"  Live cells: {info['board_statistics']['live_cells']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conway's Game of Life Simulator")
    parser.add_argument("--canvas-width", type=int, default=DEFAULT_CANVAS_WIDTH,
                        help="Canvas width in pixels")
    parser.add_argument("--canvas-height", type=int, default=DEFAULT_CANVAS_HEIGHT,
                        help="Canvas height in pixels")
    parser.add_argument("--cell-size", "-c", type=int, default=DEFAULT_CELL_SIZE,
                        help="Cell size in pixels; must divide both canvas sides")
    parser.add_argument("--fps", type=float, default=DEFAULT_FPS,
                        help="Generations per second")
    parser.add_argument("--generations", "-g", type=int, default=10,
                        help="Number of generations to simulate")
    parser.add_argument("--shape", "-s", help="Shape id to stamp instead of a random start")
    parser.add_argument("--at", nargs=2, type=int, default=[0, 0], metavar=("X", "Y"),
                        help="Top-left cell for --shape")
    parser.add_argument("--seed", type=int, help="Seed for the random start")
    parser.add_argument("--shapes-file", help="JSON file of {id, name, type, data} shapes")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--interactive", "-i", action="store_true",
                        help="Run in interactive mode")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command line argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        config = CanvasConfig.from_args(args)
        catalog = (ShapeCatalog.from_file(args.shapes_file) if args.shapes_file
                   else ShapeCatalog.builtin())
    except (LifeError, ValueError, ShapeCatalogError) as e:
        _logger.error("Invalid configuration: %s", e)
        parser.error(str(e))

    simulator = LifeSimulator(config, catalog)

    if args.interactive:
        interactive_mode(simulator)
        return 0
    return batch_mode(simulator, args.generations, shape_id=args.shape,
                      at=tuple(args.at), seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
