"""
packing.py - Greedy edge-matching assembly of jigsaw tiles

Strategy:
1. Put the start tile at (0, 0) with the identity orientation
2. Sweep the unplaced tiles in index order; each one that mates an exposed
   edge of a placed tile is put next to it
3. Repeat sweeps until everything is placed (or a sweep places nothing)
4. Shift coordinates so the bounding box starts at (0, 0)
"""
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import ConfigurationError, PlacementConflictError, SolverStallError
from .geometry import IDENTITY, SIDES, Orientation, Side
from .tile import Tile


@dataclass
class Placement:
    tile_index: int
    tile: Tile
    x: int
    y: int
    orientation: Orientation = IDENTITY

    @property
    def label(self) -> int:
        return self.tile.label

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def edge(self, side: Side) -> int:
        """Edge code this placement shows on ``side``."""
        return self.tile.edge_under(side, self.orientation)

    def neighbour_position(self, side: Side) -> Tuple[int, int]:
        dx, dy = side.offset
        return (self.x + dx, self.y + dy)


class Puzzle:
    """Placements in the order they were made, indexed by grid position."""

    def __init__(self, placements: Optional[Sequence[Placement]] = None):
        self.placements: List[Placement] = []
        self._by_position: Dict[Tuple[int, int], Placement] = {}
        self._placed_indices = set()
        for placement in placements or []:
            self.add(placement)

    def __len__(self):
        return len(self.placements)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self.placements)

    def add(self, placement: Placement):
        if placement.position in self._by_position:
            other = self._by_position[placement.position]
            raise PlacementConflictError(
                [placement.label],
                f"Tile {placement.label} would overlap tile {other.label} "
                f"at {placement.position}"
            )
        if placement.tile_index in self._placed_indices:
            raise PlacementConflictError(
                [placement.label], f"Tile {placement.label} is already placed"
            )
        self.placements.append(placement)
        self._by_position[placement.position] = placement
        self._placed_indices.add(placement.tile_index)

    def get(self, x: int, y: int) -> Optional[Placement]:
        return self._by_position.get((x, y))

    def placement_at(self, x: int, y: int) -> Placement:
        placement = self.get(x, y)
        if placement is None:
            raise KeyError(f"No tile placed at ({x}, {y})")
        return placement

    def has_tile(self, tile_index: int) -> bool:
        return tile_index in self._placed_indices

    def bounds(self) -> Tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y) of the placed cells."""
        if not self.placements:
            return (0, 0, 0, 0)
        xs = [p.x for p in self.placements]
        ys = [p.y for p in self.placements]
        return min(xs), min(ys), max(xs), max(ys)

    @property
    def width(self) -> int:
        min_x, _, max_x, _ = self.bounds()
        return max_x - min_x + 1 if self.placements else 0

    @property
    def height(self) -> int:
        _, min_y, _, max_y = self.bounds()
        return max_y - min_y + 1 if self.placements else 0

    def normalize(self):
        """Shift so min x, y are at 0."""
        min_x, min_y, _, _ = self.bounds()
        for placement in self.placements:
            placement.x -= min_x
            placement.y -= min_y
        self._by_position = {p.position: p for p in self.placements}

    def corner_labels(self) -> Tuple[int, int, int, int]:
        """Labels at the corners: top-left, top-right, bottom-right, bottom-left."""
        min_x, min_y, max_x, max_y = self.bounds()
        return (
            self.placement_at(min_x, min_y).label,
            self.placement_at(max_x, min_y).label,
            self.placement_at(max_x, max_y).label,
            self.placement_at(min_x, max_y).label,
        )

    def corner_product(self) -> int:
        return math.prod(self.corner_labels())


@dataclass
class SolverConfig:
    start_tile: int = 0                 # index of the tile fixed at (0, 0)
    max_passes: Optional[int] = None    # None: sweep until done or stalled

    @classmethod
    def default(cls):
        """Start from the first tile in input order."""
        return cls()

    @classmethod
    def from_last_tile(cls, n_tiles: int):
        """Start from the last tile in input order."""
        return cls(start_tile=n_tiles - 1)


class JigsawSolver:
    """
    Greedy edge-matching solver.

    Relies on every interior edge having a unique mate up to reversal, so the
    first match found is the right one and no backtracking is needed.
    """

    def __init__(self, tiles: Sequence[Tile], config: Optional[SolverConfig] = None):
        if not tiles:
            raise ConfigurationError("No tiles to assemble")
        self.tiles = list(tiles)
        self.config = config or SolverConfig.default()
        if not 0 <= self.config.start_tile < len(self.tiles):
            raise ConfigurationError(
                f"start_tile={self.config.start_tile} outside 0..{len(self.tiles) - 1}"
            )
        self.puzzle = Puzzle()
        self.passes = 0

    def unplaced_labels(self) -> List[int]:
        return [
            tile.label for i, tile in enumerate(self.tiles)
            if not self.puzzle.has_tile(i)
        ]

    def exposed_edges(self) -> Iterator[Tuple[Placement, Side, int]]:
        """(placement, side, code) for every side whose neighbour cell is empty."""
        for placement in self.puzzle:
            for side in SIDES:
                if self.puzzle.get(*placement.neighbour_position(side)) is None:
                    yield placement, side, placement.edge(side)

    def agrees_with_neighbours(self, candidate: Placement) -> bool:
        """True if ``candidate`` shows the same code as every placed neighbour."""
        for side in SIDES:
            neighbour = self.puzzle.get(*candidate.neighbour_position(side))
            if neighbour is not None and neighbour.edge(side.opposite) != candidate.edge(side):
                return False
        return True

    def try_place(self, tile_index: int) -> bool:
        """
        Place tile ``tile_index`` against the first exposed edge it mates.
        Orientations that disagree with another neighbour of the target cell
        are skipped in favour of the next candidate.
        """
        tile = self.tiles[tile_index]
        for placement, side, code in self.exposed_edges():
            x, y = placement.neighbour_position(side)
            for mating in tile.matings(code, side.opposite):
                candidate = Placement(tile_index, tile, x, y, mating.orientation)
                if self.agrees_with_neighbours(candidate):
                    self.puzzle.add(candidate)
                    return True
        return False

    def solve(self, verbose: bool = False) -> Puzzle:
        """Assemble all tiles; raises SolverStallError when a pass places nothing."""
        start = self.config.start_tile
        self.puzzle = Puzzle([Placement(start, self.tiles[start], 0, 0, IDENTITY)])
        self.passes = 0
        total = len(self.tiles)

        if verbose:
            print(f"Assembling {total} tiles from tile {self.tiles[start].label}...")

        while len(self.puzzle) < total:
            if self.config.max_passes is not None and self.passes >= self.config.max_passes:
                raise SolverStallError(
                    self.unplaced_labels(),
                    f"Gave up after {self.passes} passes with "
                    f"{total - len(self.puzzle)} tile(s) unplaced"
                )
            self.passes += 1
            placed = 0
            for index in range(total):
                if self.puzzle.has_tile(index):
                    continue
                if self.try_place(index):
                    placed += 1

            if verbose:
                print(f"  pass {self.passes}: placed {placed}, {len(self.puzzle)}/{total} tiles")

            if placed == 0:
                raise SolverStallError(self.unplaced_labels())

        self.puzzle.normalize()
        return self.puzzle


def solve_puzzle(
    tiles: Sequence[Tile],
    config: Optional[SolverConfig] = None,
    verbose: bool = False
) -> Puzzle:
    """Assemble ``tiles`` into a normalized puzzle."""
    return JigsawSolver(tiles, config=config).solve(verbose=verbose)
