"""Day 23 elf diffusion."""
from __future__ import annotations
import numpy as np
import pytest

from aocsearch import elves
from aocsearch.errors import NoSolutionError, ParseError

SMALL = """\
.....
..##.
..#..
.....
..##.
.....
"""


def _cells(positions):
    return sorted(map(tuple, positions.tolist()))


def test_parse(elves_text):
    positions = elves.parse(elves_text)
    assert positions.shape == (22, 2)
    assert positions.dtype == np.int64


def test_small_example_rounds():
    positions = elves.parse(SMALL)
    positions, moved = elves.play_round(positions, 0)
    # The two elves aiming at (3, 2) both stay put
    assert moved == 3
    assert _cells(positions) == [(0, 2), (0, 3), (2, 2), (3, 3), (4, 2)]
    positions, _ = elves.play_round(positions, 1)
    positions, _ = elves.play_round(positions, 2)
    assert _cells(positions) == [(0, 2), (1, 4), (2, 0), (3, 4), (5, 2)]
    _, moved = elves.play_round(positions, 3)
    assert moved == 0


def test_play_round_leaves_input_untouched(elves_text):
    positions = elves.parse(elves_text)
    before = positions.copy()
    elves.play_round(positions, 0)
    assert np.array_equal(positions, before)


def test_sample_answers(elves_text):
    positions = elves.parse(elves_text)
    assert elves.solve_part1(positions) == 110
    assert elves.solve_part2(positions) == 20


def test_empty_ground():
    positions = np.array([[0, 0], [2, 3]], dtype=np.int64)
    assert elves.empty_ground(positions) == 3 * 4 - 2


def test_round_limit(elves_text):
    with pytest.raises(NoSolutionError):
        elves.solve_part2(elves.parse(elves_text), max_rounds=5)


@pytest.mark.parametrize("text", ["...\n", ".#x\n"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ParseError):
        elves.parse(text)
