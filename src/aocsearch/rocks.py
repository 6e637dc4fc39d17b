"""rocks.py - Day 17: height of a tower of falling rocks pushed by jets.

The chamber is a numpy bool grid (row 0 = floor level, grows upward on
demand). One simulation step drops one rock; the measurement delta is the
height it adds. simulate_periodic detects the repeating pattern of
(next rock, next jet, top of the tower) and extrapolates to 10^12 rocks.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

import numpy as np

from . import config
from .errors import ParseError
from .simulation import simulate_periodic
from .types import PeriodicResult
from .utils.hash_utils import hash_ndarray_int

ROCK_FORMS = """\
####

.#.
###
.#.

..#
..#
###

#
#
#
#

##
##"""


def build_rock_forms(text: str = ROCK_FORMS) -> List[np.ndarray]:
    """Rock shapes as bool arrays with row 0 at the bottom."""
    shapes = []
    for block in text.split("\n\n"):
        rows = [[c == "#" for c in line] for line in block.splitlines()]
        shapes.append(np.array(rows[::-1], dtype=config.BOOL_DTYPE))
    return shapes


SHAPES = build_rock_forms()


def parse(text: str) -> Tuple[int, ...]:
    """Jet pattern as +1 (right) / -1 (left) pushes.

    Raises:
        ParseError: If the input has no jets
    """
    jets = tuple(1 if c == ">" else -1 for c in text if c in "<>")
    if not jets:
        raise ParseError("No jet pattern found in input")
    return jets


class Chamber:
    """Rolling tower state owned by one simulation run.

    Attributes:
        grid: bool array (capacity, width); True = settled rock
        height: Current tower height
        rock: Index of the next rock shape
        jet: Index of the next jet push
    """

    def __init__(
        self,
        jets: Tuple[int, ...],
        width: int = config.CHAMBER_WIDTH,
        spawn_left: int = config.ROCK_SPAWN_LEFT,
        spawn_gap: int = config.ROCK_SPAWN_GAP,
        depth: int = config.ROCK_PROFILE_DEPTH,
        shapes: Optional[List[np.ndarray]] = None,
    ):
        self.jets = jets
        self.width = width
        self.spawn_left = spawn_left
        self.spawn_gap = spawn_gap
        self.depth = depth
        self.shapes = SHAPES if shapes is None else shapes
        self.grid = np.zeros((64, width), dtype=config.BOOL_DTYPE)
        self.height = 0
        self.rock = 0
        self.jet = 0

    def _grow(self, needed: int) -> None:
        capacity = self.grid.shape[0]
        if needed <= capacity:
            return
        grown = np.zeros((max(needed, 2 * capacity), self.width), dtype=config.BOOL_DTYPE)
        grown[:capacity] = self.grid
        self.grid = grown

    def _collides(self, shape: np.ndarray, x: int, y: int) -> bool:
        h, w = shape.shape
        if x < 0 or x + w > self.width or y < 0:
            return True
        return bool(np.any(self.grid[y:y + h, x:x + w] & shape))

    def drop(self) -> int:
        """Drop the next rock until it rests; return the height it added."""
        shape = self.shapes[self.rock]
        self.rock = (self.rock + 1) % len(self.shapes)
        h, w = shape.shape
        x = self.spawn_left
        y = self.height + self.spawn_gap
        self._grow(y + h)

        while True:
            push = self.jets[self.jet]
            self.jet = (self.jet + 1) % len(self.jets)
            if not self._collides(shape, x + push, y):
                x += push
            if self._collides(shape, x, y - 1):
                break
            y -= 1

        self.grid[y:y + h, x:x + w] |= shape
        top = max(self.height, y + h)
        gained = top - self.height
        self.height = top
        return gained

    def signature(self) -> Tuple[int, int, str]:
        """(next rock, next jet, top `depth` rows); the floor counts as rock."""
        lo = self.height - self.depth
        if lo >= 0:
            top = self.grid[lo:self.height]
        else:
            floor = np.ones((-lo, self.width), dtype=config.BOOL_DTYPE)
            top = np.vstack([floor, self.grid[:self.height]])
        return (self.rock, self.jet, hash_ndarray_int(top))

    def render(self) -> str:
        """Tower as text, top row first (debug aid)."""
        rows = self.grid[:self.height][::-1]
        return "\n".join("|" + "".join("#" if c else "." for c in row) + "|" for row in rows)


def _step(chamber: Chamber):
    return chamber, chamber.drop()


def tower_height(jets: Tuple[int, ...], rocks: int, **chamber_options) -> PeriodicResult:
    """Tower height after `rocks` rocks, extrapolated through the first cycle."""
    chamber = Chamber(jets, **chamber_options)
    return simulate_periodic(chamber, _step, Chamber.signature, rocks)


def tower_height_direct(jets: Tuple[int, ...], rocks: int, **chamber_options) -> int:
    """Tower height after dropping every rock for real."""
    chamber = Chamber(jets, **chamber_options)
    for _ in range(rocks):
        chamber.drop()
    return chamber.height


def solve_part1(
    jets: Tuple[int, ...], rocks: int = config.ROCK_COUNT, stats: Optional[Dict] = None
) -> int:
    result = tower_height(jets, rocks)
    if stats is not None:
        stats.update(result.stats())
    return result.value


def solve_part2(
    jets: Tuple[int, ...], rocks: int = config.ROCK_COUNT_LONG, stats: Optional[Dict] = None
) -> int:
    result = tower_height(jets, rocks)
    if stats is not None:
        stats.update(result.stats())
    return result.value
