"""
Advent of Code 2020 - day 20 (tile jigsaw) and day 23 (cup game)
- Dihedral orientation algebra shared by tiles and the stitched image
- Greedy edge-matching tile assembly
- Sea-monster search over all eight image orientations
- Successor-array cup ring with O(1) rounds
"""

from .geometry import (
    Orientation,
    ORIENTATIONS,
    IDENTITY,
    Side,
    SIDES,
    remap,
    compose,
    inverse,
    orient_grid,
)

from .tile import (
    Tile,
    Mating,
    parse_tile,
    parse_tiles,
    reverse_bits,
)

from .packing import (
    Placement,
    Puzzle,
    SolverConfig,
    JigsawSolver,
    solve_puzzle,
)

from .image import (
    SEA_MONSTER,
    render_image,
    is_sea_monster,
    count_sea_monsters,
    find_sea_monsters,
    water_roughness,
)

from .cups import (
    CupRing,
    CupGameConfig,
    play_cup_game,
)

from .validate import (
    validate_puzzle,
    validate_ring,
    has_unique_edges,
)

from .errors import (
    PuzzleError,
    TileParseError,
    SolverStallError,
    PlacementConflictError,
    NoSeaMonstersError,
    CupSeedError,
    ConfigurationError,
)

__version__ = "1.0.0"
