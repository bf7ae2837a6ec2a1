"""
io_utils.py - Input loading and text rendering for the day 20 / day 23 solvers
"""
import os
from typing import List, Optional

import numpy as np

from .errors import ConfigurationError
from .geometry import IDENTITY, Orientation
from .packing import Puzzle
from .tile import Tile, parse_tiles


def find_input_path(day: int) -> str:
    """Find the puzzle input file for ``day``."""
    candidates = [
        f"./inputs/day{day:02d}.txt",
        f"./inputs/day-{day}.txt",
        f"./day-{day}/input.txt",
        "./input.txt",
    ]
    for path in candidates:
        if os.path.isfile(path):
            return path
    raise FileNotFoundError(f"Could not find input for day {day}")


def read_text(path: str) -> str:
    with open(path, "r") as f:
        return f.read()


def read_tiles(path: str) -> List[Tile]:
    """Parse a day 20 tile file."""
    return parse_tiles(read_text(path))


def read_seed(path: str) -> str:
    """First non-blank line of a day 23 input file."""
    for line in read_text(path).splitlines():
        if line.strip():
            return line.strip()
    raise ConfigurationError(f"No cup seed in {path}")


def format_grid(grid: np.ndarray, mask: Optional[np.ndarray] = None) -> str:
    """'#' / '.' rows; cells set in ``mask`` are drawn as 'O'."""
    rows = []
    for y in range(grid.shape[0]):
        chars = []
        for x in range(grid.shape[1]):
            if mask is not None and mask[y, x]:
                chars.append("O")
            else:
                chars.append("#" if grid[y, x] else ".")
        rows.append("".join(chars))
    return "\n".join(rows)


def format_tile(tile: Tile, orientation: Orientation = IDENTITY, border: bool = True) -> str:
    header = f"Tile {tile.label}: {orientation.name}"
    grid = tile.oriented(orientation) if border else tile.interior(orientation)
    return header + "\n" + format_grid(grid)


def format_label_grid(puzzle: Puzzle) -> str:
    """Tile labels laid out by grid position, 'none' for empty cells."""
    if not len(puzzle):
        return ""
    min_x, min_y, max_x, max_y = puzzle.bounds()
    rows = []
    for y in range(min_y, max_y + 1):
        cells = []
        for x in range(min_x, max_x + 1):
            placement = puzzle.get(x, y)
            cells.append(f"{placement.label:04d}" if placement else "none")
        rows.append(" ".join(cells))
    return "\n".join(rows)


def print_jigsaw_summary(puzzle: Puzzle, corner_product: int, roughness: int):
    print("=" * 60)
    print("JIGSAW SUMMARY")
    print("=" * 60)
    print(f"Grid: {puzzle.width}x{puzzle.height} tiles")
    print(f"Corners: {', '.join(str(label) for label in puzzle.corner_labels())}")
    print(f"Corner product: {corner_product}")
    print(f"Water roughness: {roughness}")
    print("=" * 60)
