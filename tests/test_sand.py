"""Day 14 falling sand."""
from __future__ import annotations
import numpy as np
import pytest

from aocsearch import sand
from aocsearch.errors import ParseError


def test_parse_rasterises_paths(sand_text):
    rocks = sand.parse(sand_text)
    assert (498, 5) in rocks
    assert (497, 6) in rocks
    assert (494, 9) in rocks and (502, 9) in rocks
    assert len(rocks) == 20


def test_sample_answers(sand_text):
    rocks = sand.parse(sand_text)
    assert sand.solve_part1(rocks) == 24
    assert sand.solve_part2(rocks) == 93


def test_build_cave_fits_the_pile(sand_text):
    rocks = sand.parse(sand_text)
    grid, left, lowest = sand.build_cave(rocks)
    assert lowest == 9
    assert grid.shape[0] == lowest + 2 + 1
    assert left <= 500 - grid.shape[0]
    assert int(grid.sum()) == len(rocks)


def test_pour_on_flat_floor():
    grid = np.zeros((3, 5), dtype=bool)
    grid[-1, :] = True
    # A 2-row pyramid of 1 + 3 grains fits over the floor
    assert sand.pour(grid, 2) == 4
    assert grid[0, 2] and grid[1, 1:4].all()


def test_parse_rejects_diagonals():
    with pytest.raises(ParseError):
        sand.parse("1,1 -> 3,3\n")


@pytest.mark.parametrize("text", ["", "1;2 -> 3,2\n", "a,b -> 1,1\n"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ParseError):
        sand.parse(text)
