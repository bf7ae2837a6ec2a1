#!/usr/bin/env python3
"""
run.py - Main entry point for the Advent of Code 2020 day 20 / day 23 solvers

Usage:
    python run.py day20 [--input tiles.txt] [--start-tile 0] [--show] [--verbose]
    python run.py day23 (--seed 389125467 | --input seed.txt) [--variant small|large|both]

Outputs:
    day20: corner product, water roughness
    day23: labels after cup 1 (small), product of the two cups after cup 1 (large)
"""
import sys
import os
import time
import argparse

# Add package root to path
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from aoc2020.errors import PuzzleError
from aoc2020.packing import SolverConfig, solve_puzzle
from aoc2020.image import render_image, find_sea_monsters, monster_mask, water_roughness
from aoc2020.geometry import orient_grid
from aoc2020.cups import CupGameConfig, play_cup_game
from aoc2020.validate import validate_puzzle
from aoc2020.io_utils import (
    find_input_path, read_tiles, read_seed,
    format_grid, format_label_grid, print_jigsaw_summary
)


def run_day20(input_path: str = None, start_tile: int = 0,
              show: bool = False, verbose: bool = False):
    """Assemble the tiles and report corner product and water roughness."""
    print("=" * 70)
    print("DAY 20 - JURASSIC JIGSAW")
    print("=" * 70)

    input_path = input_path or find_input_path(20)
    tiles = read_tiles(input_path)
    print(f"✓ Loaded {len(tiles)} tiles from {input_path}")

    start_time = time.time()
    config = SolverConfig(start_tile=start_tile)
    puzzle = solve_puzzle(tiles, config=config, verbose=verbose)

    result = validate_puzzle(puzzle, tiles)
    if result.valid:
        print("✓ Assembly validated")
    else:
        print(f"⚠ Assembly issue: {result.error_message}")

    if verbose:
        print()
        print(format_label_grid(puzzle))
        print()

    corner_product = puzzle.corner_product()
    roughness = water_roughness(puzzle)

    if show:
        image = render_image(puzzle)
        orientation, count = find_sea_monsters(image)
        oriented = orient_grid(image, orientation)
        print(f"\n{count} sea monster(s) under {orientation.name}:")
        print(format_grid(oriented, monster_mask(oriented)))
        print()

    print_jigsaw_summary(puzzle, corner_product, roughness)
    print(f"Solved in {time.time() - start_time:.2f}s")
    return corner_product, roughness


def run_day23(seed: str, variant: str = "both", verbose: bool = False):
    """Play the cup game in the requested variant(s)."""
    print("=" * 70)
    print("DAY 23 - CRAB CUPS")
    print("=" * 70)
    print(f"Seed: {seed}")

    answers = {}
    if variant in ("small", "both"):
        start_time = time.time()
        ring = play_cup_game(seed, CupGameConfig.small_game())
        answers["small"] = ring.labels_after_one()
        print(f"Part one: {answers['small']} ({time.time() - start_time:.2f}s)")

    if variant in ("large", "both"):
        start_time = time.time()
        ring = play_cup_game(seed, CupGameConfig.large_game(), verbose=verbose)
        first, second = ring.labels_from(1, 3)[1:]
        answers["large"] = ring.product_after_one()
        print(f"Part two: {first} * {second} = {answers['large']} "
              f"({time.time() - start_time:.1f}s)")

    return answers


def parse_args():
    parser = argparse.ArgumentParser(description="Advent of Code 2020 day 20 / day 23 solver")
    subparsers = parser.add_subparsers(dest="day", required=True)

    day20 = subparsers.add_parser("day20", help="Tile jigsaw and sea monsters")
    day20.add_argument("--input", default=None, help="Tile file (default: search ./inputs)")
    day20.add_argument("--start-tile", type=int, default=0, help="Index of the tile fixed at (0, 0)")
    day20.add_argument("--show", action="store_true", help="Print the image with monsters marked")
    day20.add_argument("--verbose", action="store_true", help="Print solver progress")

    day23 = subparsers.add_parser("day23", help="Crab cups")
    source = day23.add_mutually_exclusive_group()
    source.add_argument("--seed", default=None, help="Cup labels in clockwise order")
    source.add_argument("--input", default=None, help="File holding the seed")
    day23.add_argument(
        "--variant",
        choices=["small", "large", "both"],
        default="both",
        help="Which part to play"
    )
    day23.add_argument("--verbose", action="store_true", help="Print round progress")
    return parser.parse_args()


def main():
    args = parse_args()
    try:
        if args.day == "day20":
            run_day20(args.input, args.start_tile, show=args.show, verbose=args.verbose)
        else:
            seed = args.seed or read_seed(args.input or find_input_path(23))
            run_day23(seed, variant=args.variant, verbose=args.verbose)
    except (PuzzleError, FileNotFoundError) as e:
        print(f"✗ Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
