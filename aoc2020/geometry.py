"""
geometry.py - Orientation algebra for square grids
The eight symmetries of a square (4 quarter turns, each optionally mirrored)
as one enum, with a single coordinate primitive shared by tile interiors,
tile edges and the stitched image.
"""
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np


class Orientation(Enum):
    """Element of the dihedral group of a square, valued (rotation, flipped)."""
    IDENTITY = (0, False)
    ROT90 = (1, False)
    ROT180 = (2, False)
    ROT270 = (3, False)
    FLIP = (0, True)
    FLIP_ROT90 = (1, True)
    FLIP_ROT180 = (2, True)
    FLIP_ROT270 = (3, True)

    @property
    def rotation(self) -> int:
        return self.value[0]

    @property
    def flipped(self) -> bool:
        return self.value[1]

    @classmethod
    def of(cls, rotation: int, flipped: bool = False) -> "Orientation":
        """Look up an orientation by quarter turns (any integer) and mirror flag."""
        return cls((rotation % 4, bool(flipped)))

    def then(self, other: "Orientation") -> "Orientation":
        return compose(self, other)

    def inverse(self) -> "Orientation":
        return inverse(self)

    def __repr__(self):
        return f"Orientation.{self.name}"


# Fixed scan order: unflipped rotations first, then flipped ones
ORIENTATIONS: List[Orientation] = list(Orientation)
IDENTITY = Orientation.IDENTITY


def remap(x, y, width, height, orientation: Orientation):
    """
    Source coordinate read by destination (x, y) under ``orientation``.

    ``width`` and ``height`` are the destination grid's dimensions. Plain
    arithmetic only, so x and y may be ints or numpy index arrays.
    """
    w = width - 1
    h = height - 1
    rotation, flipped = orientation.value
    if not flipped:
        if rotation == 0:
            return x, y
        if rotation == 1:
            return h - y, x
        if rotation == 2:
            return w - x, h - y
        return y, w - x
    if rotation == 0:
        return w - x, y
    if rotation == 1:
        return y, x
    if rotation == 2:
        return x, h - y
    return h - y, w - x


def orient_grid(grid: np.ndarray, orientation: Orientation) -> np.ndarray:
    """Re-read a 2-D array under ``orientation`` (ROT90 matches numpy.rot90)."""
    grid = np.asarray(grid)
    rows, cols = grid.shape[:2]
    if orientation.rotation % 2:
        rows, cols = cols, rows
    ys, xs = np.indices((rows, cols))
    src_x, src_y = remap(xs, ys, cols, rows, orientation)
    return grid[src_y, src_x]


def _signature(orientation: Orientation, size: int = 3) -> Tuple[Tuple[int, int], ...]:
    return tuple(
        remap(x, y, size, size, orientation)
        for y in range(size) for x in range(size)
    )


_BY_SIGNATURE: Dict[Tuple[Tuple[int, int], ...], Orientation] = {
    _signature(o): o for o in ORIENTATIONS
}


def _compose_slow(first: Orientation, second: Orientation, size: int = 3) -> Orientation:
    sig = []
    for y in range(size):
        for x in range(size):
            bx, by = remap(x, y, size, size, second)
            sig.append(remap(bx, by, size, size, first))
    return _BY_SIGNATURE[tuple(sig)]


_CAYLEY: Dict[Tuple[Orientation, Orientation], Orientation] = {
    (a, b): _compose_slow(a, b) for a in ORIENTATIONS for b in ORIENTATIONS
}

_INVERSES: Dict[Orientation, Orientation] = {
    a: next(b for b in ORIENTATIONS if _CAYLEY[(a, b)] is IDENTITY)
    for a in ORIENTATIONS
}


def compose(first: Orientation, second: Orientation) -> Orientation:
    """
    Orientation equal to orienting a grid by ``first`` and then by ``second``.

    In coordinates: remap(p, compose(a, b)) == remap(remap(p, b), a).
    """
    return _CAYLEY[(first, second)]


def inverse(orientation: Orientation) -> Orientation:
    """Orientation undoing ``orientation``: remap(remap(p, o), inverse(o)) == p."""
    return _INVERSES[orientation]


class Side(Enum):
    """Geometric side of a square cell, in scan order."""
    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    @property
    def offset(self) -> Tuple[int, int]:
        """Grid step to the neighbour across this side (y grows downward)."""
        return _SIDE_OFFSETS[self]

    @property
    def opposite(self) -> "Side":
        return Side((self.value + 2) % 4)


SIDES: List[Side] = list(Side)

_SIDE_OFFSETS = {
    Side.TOP: (0, -1),
    Side.RIGHT: (1, 0),
    Side.BOTTOM: (0, 1),
    Side.LEFT: (-1, 0),
}


def side_cells(side: Side, size: int) -> List[Tuple[int, int]]:
    """Cells along ``side`` in reading order (left to right, top to bottom)."""
    last = size - 1
    if side is Side.TOP:
        return [(i, 0) for i in range(size)]
    if side is Side.RIGHT:
        return [(last, i) for i in range(size)]
    if side is Side.BOTTOM:
        return [(i, last) for i in range(size)]
    return [(0, i) for i in range(size)]


def _side_source(side: Side, orientation: Orientation, size: int = 4) -> Tuple[Side, bool]:
    cells = [remap(x, y, size, size, orientation) for x, y in side_cells(side, size)]
    for source in SIDES:
        reference = side_cells(source, size)
        if cells == reference:
            return source, False
        if cells == reference[::-1]:
            return source, True
    raise AssertionError(f"{side} under {orientation} does not land on a side")


_SIDE_SOURCES: Dict[Tuple[Side, Orientation], Tuple[Side, bool]] = {
    (side, o): _side_source(side, o) for side in SIDES for o in ORIENTATIONS
}


def side_source(side: Side, orientation: Orientation) -> Tuple[Side, bool]:
    """
    Which unoriented side ends up on ``side`` after ``orientation``, and
    whether its reading order is reversed there.
    """
    return _SIDE_SOURCES[(side, orientation)]
