"""
tile.py - Square image tiles for the day 20 jigsaw
Edge codes are W-bit integers read in reading order (top and bottom left to
right, left and right top to bottom), first pixel as the most significant bit.
Two touching placements therefore present equal codes on their shared side.
"""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import TileParseError
from .geometry import (
    IDENTITY, ORIENTATIONS, SIDES, Orientation, Side,
    orient_grid, remap, side_cells, side_source
)

HEADER_PATTERN = re.compile(r"^Tile (\d+):$")
PIXEL_CHARS = {"#": True, ".": False}


def reverse_bits(code: int, width: int) -> int:
    """Reverse the low ``width`` bits of ``code`` (an edge read from the other end)."""
    result = 0
    for _ in range(width):
        result = (result << 1) | (code & 1)
        code >>= 1
    return result


def read_edge(pixels: np.ndarray, side: Side) -> int:
    """Edge code of ``side`` of a square pixel array."""
    code = 0
    for x, y in side_cells(side, pixels.shape[0]):
        code = (code << 1) | int(pixels[y, x])
    return code


@dataclass(frozen=True)
class Mating:
    """How to orient a tile so ``side`` shows a requested edge code."""
    side: Side
    orientation: Orientation


class Tile:
    """
    A labelled square bitmap.

    ``pixels`` is a boolean array indexed [y, x]. The four stored edge codes
    are those of the unoriented tile, in side order (top, right, bottom, left).
    """

    def __init__(self, label: int, pixels):
        pixels = np.asarray(pixels, dtype=bool)
        if pixels.ndim != 2 or pixels.shape[0] != pixels.shape[1]:
            raise TileParseError(f"Tile {label} is not square: shape {pixels.shape}")
        if pixels.shape[0] < 3:
            raise TileParseError(f"Tile {label} is too small to have an interior")

        self.label = int(label)
        self.pixels = pixels
        self.width = pixels.shape[0]
        self.edges: Tuple[int, ...] = tuple(read_edge(pixels, side) for side in SIDES)

        # Orientations (in scan order) presenting each (side, code)
        self._presentations: Dict[Tuple[Side, int], List[Orientation]] = {}
        for side in SIDES:
            for orientation in ORIENTATIONS:
                key = (side, self.edge_under(side, orientation))
                self._presentations.setdefault(key, []).append(orientation)

    @classmethod
    def from_text(cls, text: str) -> "Tile":
        return parse_tile(text)

    def __repr__(self):
        return f"Tile({self.label}, width={self.width})"

    @property
    def interior_width(self) -> int:
        return self.width - 2

    def edge_under(self, side: Side, orientation: Orientation = IDENTITY) -> int:
        """Code shown on geometric ``side`` once the tile is placed with ``orientation``."""
        source, reversed_ = side_source(side, orientation)
        code = self.edges[source.value]
        return reverse_bits(code, self.width) if reversed_ else code

    def edges_under(self, orientation: Orientation) -> Tuple[int, ...]:
        return tuple(self.edge_under(side, orientation) for side in SIDES)

    def mates(self, edge_code: int, side: Optional[Side] = None) -> Optional[Mating]:
        """
        First way to orient this tile so that ``side`` (or, when omitted, any
        side in scan order) shows exactly ``edge_code``; None if none does.
        """
        matings = self.matings(edge_code, side)
        return matings[0] if matings else None

    def matings(self, edge_code: int, side: Optional[Side] = None) -> List[Mating]:
        """Every (side, orientation) showing ``edge_code``, in scan order."""
        sides = SIDES if side is None else [side]
        return [
            Mating(candidate, orientation)
            for candidate in sides
            for orientation in self._presentations.get((candidate, edge_code), [])
        ]

    def pixel(self, x: int, y: int, orientation: Orientation = IDENTITY) -> bool:
        """Interior pixel (x, y) of the oriented tile."""
        size = self.interior_width
        if not (0 <= x < size and 0 <= y < size):
            raise IndexError(f"Interior pixel ({x}, {y}) outside 0..{size - 1}")
        src_x, src_y = remap(x, y, size, size, orientation)
        return bool(self.pixels[src_y + 1, src_x + 1])

    def interior(self, orientation: Orientation = IDENTITY) -> np.ndarray:
        return orient_grid(self.pixels[1:-1, 1:-1], orientation)

    def oriented(self, orientation: Orientation) -> np.ndarray:
        """Full pixel array, border included, under ``orientation``."""
        return orient_grid(self.pixels, orientation)

    @property
    def filled(self) -> int:
        """Number of filled interior pixels."""
        return int(np.count_nonzero(self.pixels[1:-1, 1:-1]))


def parse_tile(text: str, first_line: int = 1) -> Tile:
    """Parse one 'Tile N:' block; ``first_line`` numbers the header in messages."""
    lines = [line.rstrip() for line in text.strip("\n").splitlines()]
    if not lines:
        raise TileParseError(f"line {first_line}: empty tile block")

    match = HEADER_PATTERN.match(lines[0].strip())
    if match is None:
        raise TileParseError(
            f"line {first_line}: expected 'Tile <number>:' header, got {lines[0]!r}"
        )
    label = int(match.group(1))

    rows = lines[1:]
    size = len(rows)
    if size < 3:
        raise TileParseError(
            f"line {first_line}: tile {label} has {size} row(s), need at least 3"
        )

    pixels = np.zeros((size, size), dtype=bool)
    for y, row in enumerate(rows):
        number = first_line + 1 + y
        if len(row) != size:
            raise TileParseError(
                f"line {number}: tile {label} row has {len(row)} pixels, "
                f"expected {size} (tiles must be square)"
            )
        for x, char in enumerate(row):
            if char not in PIXEL_CHARS:
                raise TileParseError(
                    f"line {number}, column {x + 1}: unexpected character {char!r}"
                )
            pixels[y, x] = PIXEL_CHARS[char]

    return Tile(label, pixels)


def parse_tiles(text: str) -> List[Tile]:
    """Parse blank-line separated tiles sharing one width and distinct labels."""
    tiles: List[Tile] = []
    block: List[str] = []
    start = 1
    for number, line in enumerate(text.splitlines() + [""], start=1):
        if line.strip():
            if not block:
                start = number
            block.append(line)
        elif block:
            tiles.append(parse_tile("\n".join(block), first_line=start))
            block = []

    if not tiles:
        raise TileParseError("No tiles found in input")

    width = tiles[0].width
    seen = set()
    for tile in tiles:
        if tile.width != width:
            raise TileParseError(
                f"Tile {tile.label} has width {tile.width}, expected {width}"
            )
        if tile.label in seen:
            raise TileParseError(f"Duplicate tile label {tile.label}")
        seen.add(tile.label)

    return tiles
