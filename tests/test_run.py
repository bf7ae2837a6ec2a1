import sys

import pytest

import run

from conftest import EXAMPLE_TILES


@pytest.fixture
def tiles_file(tmp_path):
    path = tmp_path / "day20.txt"
    path.write_text(EXAMPLE_TILES)
    return str(path)


def test_run_day20(tiles_file, capsys):
    assert run.run_day20(tiles_file, show=True) == (20899048083289, 273)
    out = capsys.readouterr().out
    assert "Corner product: 20899048083289" in out
    assert "Water roughness: 273" in out
    assert "2 sea monster(s)" in out


def test_run_day23_small(capsys):
    assert run.run_day23("389125467", variant="small") == {"small": "67384529"}
    assert "Part one: 67384529" in capsys.readouterr().out


def test_main_day20(tiles_file, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["run.py", "day20", "--input", tiles_file, "--start-tile", "4"])
    assert run.main() == 0


def test_main_reports_bad_seed(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["run.py", "day23", "--seed", "38x", "--variant", "small"])
    assert run.main() == 1
    assert "not a digit" in capsys.readouterr().out


def test_main_reports_bad_start_tile(tiles_file, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["run.py", "day20", "--input", tiles_file, "--start-tile", "9"])
    assert run.main() == 1
    assert "✗ Error: start_tile=9" in capsys.readouterr().out


def test_main_reports_empty_seed_file(tmp_path, monkeypatch, capsys):
    seed_file = tmp_path / "day23.txt"
    seed_file.write_text("\n")
    monkeypatch.setattr(sys, "argv", ["run.py", "day23", "--input", str(seed_file)])
    assert run.main() == 1
    assert "No cup seed" in capsys.readouterr().out
