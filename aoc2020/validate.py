"""
validate.py - Independent checks of solver output
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import box
from shapely.ops import unary_union

from .cups import CupRing
from .geometry import Side
from .packing import Placement
from .tile import Tile, reverse_bits

Position = Tuple[int, int]


@dataclass
class ValidationResult:
    valid: bool
    n_tiles: int
    n_placed: int
    duplicates: List[Position] = field(default_factory=list)
    missing: List[int] = field(default_factory=list)
    mismatched_edges: List[Tuple[Position, Position]] = field(default_factory=list)
    is_rectangle: bool = True
    error_message: Optional[str] = None


def footprint_is_rectangle(positions: Sequence[Position]) -> bool:
    """True if the unit cells at ``positions`` cover their bounding box without gaps."""
    if not positions:
        return False
    footprint = unary_union([box(x, y, x + 1, y + 1) for x, y in positions])
    xs = [x for x, _ in positions]
    ys = [y for _, y in positions]
    bounding = box(min(xs), min(ys), max(xs) + 1, max(ys) + 1)
    return footprint.equals(bounding)


def validate_puzzle(placements: Sequence[Placement], tiles: Sequence[Tile]) -> ValidationResult:
    """Check coverage, overlaps, shared edges and rectangular shape of an assembly."""
    placements = list(placements)

    counts = Counter(p.position for p in placements)
    duplicates = sorted(pos for pos, n in counts.items() if n > 1)

    placed_labels = Counter(p.label for p in placements)
    missing = sorted(t.label for t in tiles if placed_labels[t.label] == 0)

    by_position: Dict[Position, Placement] = {}
    for placement in placements:
        by_position.setdefault(placement.position, placement)

    mismatched = []
    for placement in by_position.values():
        for side in (Side.RIGHT, Side.BOTTOM):
            neighbour = by_position.get(placement.neighbour_position(side))
            if neighbour is None:
                continue
            if placement.edge(side) != neighbour.edge(side.opposite):
                mismatched.append((placement.position, neighbour.position))

    is_rectangle = footprint_is_rectangle(list(by_position))

    errors = []
    if len(placements) != len(tiles):
        errors.append(f"{len(placements)} placement(s) for {len(tiles)} tile(s)")
    if duplicates:
        errors.append(f"{len(duplicates)} shared position(s)")
    if missing:
        errors.append(f"{len(missing)} tile(s) missing")
    if mismatched:
        errors.append(f"{len(mismatched)} mismatched edge(s)")
    if not is_rectangle:
        errors.append("footprint is not a rectangle")

    return ValidationResult(
        valid=not errors,
        n_tiles=len(tiles),
        n_placed=len(placements),
        duplicates=duplicates,
        missing=missing,
        mismatched_edges=mismatched,
        is_rectangle=is_rectangle,
        error_message="; ".join(errors) if errors else None,
    )


def edge_key(code: int, width: int) -> int:
    """Direction-free key: the smaller of a code and its reversal."""
    return min(code, reverse_bits(code, width))


def edge_usage(tiles: Sequence[Tile]) -> Counter:
    """How many tile sides carry each edge (in either direction)."""
    usage = Counter()
    for tile in tiles:
        for code in tile.edges:
            usage[edge_key(code, tile.width)] += 1
    return usage


def has_unique_edges(tiles: Sequence[Tile]) -> bool:
    """No edge is shared by more than two tile sides."""
    return all(n <= 2 for n in edge_usage(tiles).values())


def corner_candidates(tiles: Sequence[Tile]) -> List[int]:
    """Labels of tiles with exactly two unmatched edges."""
    usage = edge_usage(tiles)
    corners = []
    for tile in tiles:
        unmatched = sum(1 for code in tile.edges if usage[edge_key(code, tile.width)] == 1)
        if unmatched == 2:
            corners.append(tile.label)
    return corners


def validate_ring(ring: CupRing) -> Tuple[bool, Optional[str]]:
    """Check that the successor buffer is a permutation forming one cycle."""
    successors = ring.successors
    length = len(successors)
    if not np.array_equal(np.sort(successors), np.arange(length)):
        return False, "Successor buffer is not a permutation"

    nxt = successors.tolist()
    value = ring.current
    for step in range(1, length + 1):
        value = nxt[value]
        if value == ring.current:
            if step != length:
                return False, f"Cycle through current cup has length {step}, expected {length}"
            return True, None
    return False, "Walk from current cup did not return"
