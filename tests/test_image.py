import numpy as np
import pytest

from aoc2020.errors import ConfigurationError, NoSeaMonstersError
from aoc2020.geometry import ORIENTATIONS, orient_grid
from aoc2020.image import (
    MONSTER_CELLS, SEA_MONSTER, SEA_MONSTER_TEXT,
    count_sea_monsters, find_sea_monsters, grid_from_text, is_sea_monster,
    monster_mask, monster_windows, render_image, water_roughness
)

from conftest import EXAMPLE_IMAGE


def test_stencil_shape():
    assert SEA_MONSTER.shape == (3, 20)
    assert MONSTER_CELLS == 15
    assert SEA_MONSTER[0, 18]
    assert list(np.flatnonzero(SEA_MONSTER[2])) == [1, 4, 7, 10, 13, 16]


def test_is_sea_monster():
    assert is_sea_monster("#" * 60)
    assert is_sea_monster(np.ones((3, 20), dtype=bool))
    assert is_sea_monster(SEA_MONSTER_TEXT)
    assert is_sea_monster("                  # #    ##    ##    ### #  #  #  #  #  #   ")
    # head pixel missing
    assert not is_sea_monster("                    #    ##    ##    ### #  #  #  #  #  #   ")
    assert not is_sea_monster(np.zeros((3, 20), dtype=bool))


def test_is_sea_monster_rejects_bad_window():
    with pytest.raises(ConfigurationError):
        is_sea_monster("#" * 59)
    with pytest.raises(ValueError):
        is_sea_monster(np.ones((3, 21), dtype=bool))


def test_windows_in_blank_image():
    image = np.zeros((6, 25), dtype=bool)
    image[1:4, 2:22] = SEA_MONSTER
    assert monster_windows(image) == [(2, 1)]
    assert count_sea_monsters(image) == 1
    np.testing.assert_array_equal(monster_mask(image), image)


def test_overlapping_windows_all_count():
    image = np.ones((4, 21), dtype=bool)
    assert count_sea_monsters(image) == 4


def test_image_smaller_than_stencil():
    assert count_sea_monsters(np.ones((2, 30), dtype=bool)) == 0
    assert count_sea_monsters(np.ones((10, 19), dtype=bool)) == 0


def test_no_monsters_anywhere():
    with pytest.raises(NoSeaMonstersError):
        find_sea_monsters(np.zeros((24, 24), dtype=bool))


def test_render_example(example_puzzle):
    image = render_image(example_puzzle)
    assert image.shape == (24, 24)
    assert image.dtype == bool
    assert int(image.sum()) == 303


def test_render_reproduces_example_image(example_puzzle):
    expected = grid_from_text(EXAMPLE_IMAGE.rstrip("\n"))
    assert expected.shape == (24, 24)
    matches = [o for o in ORIENTATIONS if np.array_equal(render_image(example_puzzle, o), expected)]
    assert matches


def test_render_empty_puzzle():
    from aoc2020.packing import Puzzle
    with pytest.raises(ConfigurationError):
        render_image(Puzzle())


def test_render_blocks_are_oriented_interiors(example_puzzle):
    image = render_image(example_puzzle)
    for placement in example_puzzle:
        block = image[placement.y * 8:(placement.y + 1) * 8,
                      placement.x * 8:(placement.x + 1) * 8]
        np.testing.assert_array_equal(block, placement.tile.interior(placement.orientation))


@pytest.mark.parametrize("orientation", ORIENTATIONS)
def test_render_under_whole_image_orientation(example_puzzle, orientation):
    base = render_image(example_puzzle)
    oriented = render_image(example_puzzle, orientation)
    np.testing.assert_array_equal(oriented, orient_grid(base, orientation))
    np.testing.assert_array_equal(orient_grid(oriented, orientation.inverse()), base)


def test_example_has_two_monsters_in_one_orientation(example_puzzle):
    image = render_image(example_puzzle)
    counts = [count_sea_monsters(orient_grid(image, o)) for o in ORIENTATIONS]
    assert sorted(counts) == [0] * 7 + [2]
    orientation, count = find_sea_monsters(image)
    assert count == 2
    assert counts[ORIENTATIONS.index(orientation)] == 2


def test_water_roughness(example_puzzle):
    assert water_roughness(example_puzzle) == 273


def test_roughness_independent_of_start_tile(example_tiles):
    from aoc2020.packing import SolverConfig, solve_puzzle
    for start in (0, 4, 8):
        puzzle = solve_puzzle(example_tiles, SolverConfig(start_tile=start))
        assert water_roughness(puzzle) == 273
