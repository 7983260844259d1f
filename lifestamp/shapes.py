# shapes.py
"""
Shape catalogue: named, typed shape records whose `data` field holds an
encoded shape string for shape_codec.decode().
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from .shape_codec import DecodedShape, decode

_logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "type", "data")


class ShapeCatalogError(Exception):
    """Raised when a shape catalogue file cannot be read or is malformed."""
    pass


@dataclass(frozen=True, slots=True)
class ShapeChoice:
    """A selectable shape. Only `data` matters to the board."""
    id: str
    name: str
    type: str
    data: str

    def decode(self) -> DecodedShape:
        return decode(self.data)


# Each shape carries a dead border and the implied dead bottom row.
BUILTIN_SHAPES: List[ShapeChoice] = [
    ShapeChoice("glider", "Glider", "spaceship",
                "D5\nD2L1D2\nD3L1D1\nD1L3D1\nD5"),
    ShapeChoice("lwss", "Lightweight spaceship", "spaceship",
                "D7\nD2L1D2L1D1\nD1L1D5\nD1L1D3L1D1\nD1L4D2\nD7"),
    ShapeChoice("block", "Block", "still_life",
                "D4\nD1L2D1\nD1L2D1\nD4"),
    ShapeChoice("beehive", "Beehive", "still_life",
                "D6\nD2L2D2\nD1L1D2L1D1\nD2L2D2\nD6"),
    ShapeChoice("blinker", "Blinker", "oscillator",
                "D5\nD1L3D1\nD5"),
    ShapeChoice("toad", "Toad", "oscillator",
                "D6\nD2L3D1\nD1L3D2\nD6"),
    ShapeChoice("r_pentomino", "R-pentomino", "methuselah",
                "D5\nD2L2D1\nD1L2D2\nD2L1D2\nD5"),
]


class ShapeCatalog:
    """
    Mapping of shape ids to ShapeChoice records.
    """

    def __init__(self, shapes: Iterable[ShapeChoice] = ()):
        self._shapes: Dict[str, ShapeChoice] = {}
        for shape in shapes:
            if shape.id in self._shapes:
                _logger.warning("Overwriting existing shape: %s", shape.id)
            self._shapes[shape.id] = shape

    @classmethod
    def builtin(cls) -> "ShapeCatalog":
        return cls(BUILTIN_SHAPES)

    @classmethod
    def from_file(cls, filename: str) -> "ShapeCatalog":
        """
        Load a catalogue from a JSON array of {id, name, type, data} objects.

        Records are not decoded here; a bad `data` string only fails when
        that shape is used.

        Raises:
            ShapeCatalogError: If the file is missing, not JSON, or a record
                lacks a field
        """
        file_path = Path(filename)
        if not file_path.exists():
            raise ShapeCatalogError(f"Shape file not found: {filename}")

        try:
            records = json.loads(file_path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ShapeCatalogError(f"Unable to read shape file {filename}: {e}") from e

        if not isinstance(records, list):
            raise ShapeCatalogError(f"{filename}: expected a JSON array of shapes")

        shapes = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise ShapeCatalogError(f"{filename}: entry {index} is not an object")
            missing = [f for f in REQUIRED_FIELDS if not isinstance(record.get(f), str)]
            if missing:
                raise ShapeCatalogError(
                    f"{filename}: entry {index} is missing string field(s) {missing}"
                )
            shapes.append(ShapeChoice(*(record[f] for f in REQUIRED_FIELDS)))

        _logger.debug("Loaded %d shapes from %s", len(shapes), filename)
        return cls(shapes)

    def get(self, shape_id: str) -> ShapeChoice:
        try:
            return self._shapes[shape_id]
        except KeyError as e:
            raise KeyError(
                f"Unknown shape: {shape_id}. Available: {self.ids()}"
            ) from e

    def decode(self, shape_id: str) -> DecodedShape:
        return self.get(shape_id).decode()

    def ids(self) -> List[str]:
        return list(self._shapes)

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes

    def __iter__(self) -> Iterator[ShapeChoice]:
        return iter(self._shapes.values())

    def __len__(self) -> int:
        return len(self._shapes)
