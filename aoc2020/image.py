"""
image.py - Stitched image rendering and sea-monster search
"""
from typing import List, Optional, Tuple, Union

import numpy as np
from scipy.signal import correlate2d

from .errors import ConfigurationError, NoSeaMonstersError
from .geometry import IDENTITY, ORIENTATIONS, Orientation, orient_grid
from .packing import Puzzle

SEA_MONSTER_TEXT = (
    "                  # \n"
    "#    ##    ##    ###\n"
    " #  #  #  #  #  #   "
)


def grid_from_text(text: str, width: Optional[int] = None) -> np.ndarray:
    """Boolean array from '#'-marked lines; short lines are padded with blanks."""
    rows = text.split("\n")
    width = width or max(len(row) for row in rows)
    return np.array([[c == "#" for c in row.ljust(width)] for row in rows], dtype=bool)


SEA_MONSTER = grid_from_text(SEA_MONSTER_TEXT, width=20)
MONSTER_HEIGHT, MONSTER_WIDTH = SEA_MONSTER.shape
MONSTER_CELLS = int(SEA_MONSTER.sum())   # 15


def render_image(puzzle: Puzzle, orientation: Orientation = IDENTITY) -> np.ndarray:
    """
    Stitch the oriented interiors of all placements, then re-read the whole
    image under ``orientation``. Indexed [y, x].
    """
    if not len(puzzle):
        raise ConfigurationError("Cannot render an empty puzzle")
    size = puzzle.placements[0].tile.interior_width
    min_x, min_y, _, _ = puzzle.bounds()
    image = np.zeros((puzzle.height * size, puzzle.width * size), dtype=bool)

    for placement in puzzle:
        gx = (placement.x - min_x) * size
        gy = (placement.y - min_y) * size
        image[gy:gy + size, gx:gx + size] = placement.tile.interior(placement.orientation)

    return orient_grid(image, orientation)


def _as_window(window: Union[str, np.ndarray]) -> np.ndarray:
    if isinstance(window, str):
        if "\n" in window:
            return grid_from_text(window, width=MONSTER_WIDTH)
        if len(window) != MONSTER_HEIGHT * MONSTER_WIDTH:
            raise ConfigurationError(
                f"Window text has {len(window)} characters, "
                f"expected {MONSTER_HEIGHT * MONSTER_WIDTH}"
            )
        return np.array([c == "#" for c in window], dtype=bool).reshape(
            MONSTER_HEIGHT, MONSTER_WIDTH
        )
    return np.asarray(window, dtype=bool)


def is_sea_monster(window: Union[str, np.ndarray]) -> bool:
    """True if every stencil cell is filled in a 3x20 window."""
    window = _as_window(window)
    if window.shape != SEA_MONSTER.shape:
        raise ConfigurationError(f"Window shape {window.shape}, expected {SEA_MONSTER.shape}")
    return bool(np.all(window[SEA_MONSTER]))


def _stencil_hits(image: np.ndarray) -> np.ndarray:
    image = np.asarray(image, dtype=bool)
    rows, cols = image.shape
    if rows < MONSTER_HEIGHT or cols < MONSTER_WIDTH:
        return np.zeros((0, 0), dtype=bool)
    scores = correlate2d(
        image.astype(np.int32), SEA_MONSTER.astype(np.int32), mode="valid"
    )
    return scores == MONSTER_CELLS


def monster_windows(image: np.ndarray) -> List[Tuple[int, int]]:
    """Top-left (x, y) of every window containing the stencil; windows may overlap."""
    return [(int(x), int(y)) for y, x in np.argwhere(_stencil_hits(image))]


def count_sea_monsters(image: np.ndarray) -> int:
    return int(np.count_nonzero(_stencil_hits(image)))


def monster_mask(image: np.ndarray) -> np.ndarray:
    """Pixels covered by at least one matched stencil."""
    mask = np.zeros(np.shape(image), dtype=bool)
    for x, y in monster_windows(image):
        mask[y:y + MONSTER_HEIGHT, x:x + MONSTER_WIDTH] |= SEA_MONSTER
    return mask


def find_sea_monsters(image: np.ndarray) -> Tuple[Orientation, int]:
    """First whole-image orientation (scan order) with a non-zero monster count."""
    for orientation in ORIENTATIONS:
        count = count_sea_monsters(orient_grid(image, orientation))
        if count:
            return orientation, count
    raise NoSeaMonstersError("No sea monsters in any of the 8 image orientations")


def water_roughness(puzzle: Puzzle) -> int:
    """Filled interior pixels minus 15 for every sea-monster window found."""
    image = render_image(puzzle)
    _, count = find_sea_monsters(image)
    return int(np.count_nonzero(image)) - MONSTER_CELLS * count
