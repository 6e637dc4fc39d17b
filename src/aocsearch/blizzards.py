"""blizzards.py - Day 24: shortest walk through a valley of moving blizzards.

Blizzards wrap around the valley interior, so the whole field repeats every
lcm(width, height) minutes. The field is precomputed once per period with
np.roll (one bool layer per direction) and the walk is a Dijkstra over
(x, y, phase) nodes: phase = minute mod period, which keeps the state space
finite.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from . import config
from .errors import NoSolutionError, ParseError
from .graph import shortest_path_length

Coords = Tuple[int, int]

# direction -> (axis, shift per minute)
DIRECTIONS = {">": (1, 1), "<": (1, -1), "v": (0, 1), "^": (0, -1)}
MOVES = ((0, 0), (0, -1), (1, 0), (0, 1), (-1, 0))


@dataclass(frozen=True)
class Valley:
    """Valley interior with initial blizzard layers.

    Attributes:
        width: Interior width (walls excluded)
        height: Interior height (walls excluded)
        layers: direction char -> bool array (height, width)
        entrance: (x, y) gap in the top wall, y == -1
        exit: (x, y) gap in the bottom wall, y == height
    """

    width: int
    height: int
    layers: Dict[str, np.ndarray]
    entrance: Coords
    exit: Coords

    @property
    def period(self) -> int:
        return math.lcm(self.width, self.height)


def parse(text: str) -> Valley:
    """Parse the walled valley map.

    Raises:
        ParseError: If the map is not a rectangle or lacks entrance/exit
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if len(lines) < 3:
        raise ParseError("Valley map needs at least three rows")
    full_width = len(lines[0])
    if any(len(line) != full_width for line in lines):
        raise ParseError("Input is not a rectangle")

    width = full_width - 2
    height = len(lines) - 2
    if lines[0].count(".") != 1 or lines[-1].count(".") != 1:
        raise ParseError("Expected exactly one gap in the top and bottom walls")
    entrance = (lines[0].index(".") - 1, -1)
    exit_ = (lines[-1].index(".") - 1, height)

    chars = np.array([list(line[1:-1]) for line in lines[1:-1]])
    layers = {d: chars == d for d in DIRECTIONS}
    return Valley(width, height, layers, entrance, exit_)


def blizzard_field(valley: Valley) -> np.ndarray:
    """Occupancy for every minute of one period.

    Returns:
        bool array (period, height, width); True = blizzard present
    """
    period = valley.period
    field = np.zeros((period, valley.height, valley.width), dtype=config.BOOL_DTYPE)
    for t in range(period):
        for d, (axis, shift) in DIRECTIONS.items():
            field[t] |= np.roll(valley.layers[d], shift * t, axis=axis)
    return field


def crossing(
    valley: Valley, field: np.ndarray, start: Coords, goal: Coords, start_time: int = 0
) -> Optional[int]:
    """Minutes needed to walk from start to goal leaving at start_time."""
    period = field.shape[0]
    ends = {valley.entrance, valley.exit}

    def successors(node) -> Iterator[Tuple[Tuple[int, int, int], int]]:
        x, y, phase = node
        nxt = (phase + 1) % period
        for dx, dy in MOVES:
            nx, ny = x + dx, y + dy
            if (nx, ny) in ends:
                yield (nx, ny, nxt), 1
            elif 0 <= nx < valley.width and 0 <= ny < valley.height and not field[nxt, ny, nx]:
                yield (nx, ny, nxt), 1

    return shortest_path_length(
        (start[0], start[1], start_time % period),
        successors,
        lambda node: (node[0], node[1]) == goal,
    )


def _leg(valley: Valley, field: np.ndarray, start: Coords, goal: Coords, start_time: int) -> int:
    minutes = crossing(valley, field, start, goal, start_time)
    if minutes is None:
        raise NoSolutionError(f"No path from {start} to {goal} leaving at minute {start_time}")
    return minutes


def solve_part1(valley: Valley, stats: Optional[Dict] = None) -> int:
    field = blizzard_field(valley)
    if stats is not None:
        stats["period"] = int(field.shape[0])
    return _leg(valley, field, valley.entrance, valley.exit, 0)


def solve_part2(valley: Valley, stats: Optional[Dict] = None) -> int:
    field = blizzard_field(valley)
    there = _leg(valley, field, valley.entrance, valley.exit, 0)
    back = _leg(valley, field, valley.exit, valley.entrance, there)
    again = _leg(valley, field, valley.entrance, valley.exit, there + back)
    if stats is not None:
        stats.update({"period": int(field.shape[0]), "legs": [there, back, again]})
    return there + back + again
