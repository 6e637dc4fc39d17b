"""elves.py - Day 23: elves spreading out over an unbounded grove.

Each round is computed from a frozen snapshot of the occupancy grid:
1. every elf with a neighbour proposes the first free direction in the
   current order (N, S, W, E, rotating each round)
2. proposals aimed at the same cell are dropped
3. all surviving moves are applied at once

Positions are a numpy (n, 2) array of (row, col); the snapshot is a padded
bool grid around their bounding box.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

import numpy as np

from . import config
from .errors import NoSolutionError, ParseError

# direction -> (step, three cells that must be free)
DIRECTIONS = {
    "N": ((-1, 0), ((-1, -1), (-1, 0), (-1, 1))),
    "S": ((1, 0), ((1, -1), (1, 0), (1, 1))),
    "W": ((0, -1), ((-1, -1), (0, -1), (1, -1))),
    "E": ((0, 1), ((-1, 1), (0, 1), (1, 1))),
}
ORDER = ("N", "S", "W", "E")
NEIGHBORHOOD8 = tuple((dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0))


def parse(text: str) -> np.ndarray:
    """Elf positions as int64 (n, 2) array of (row, col).

    Raises:
        ParseError: On characters other than '#' and '.', or no elves
    """
    cells = []
    for r, line in enumerate(s for s in text.splitlines() if s.strip()):
        for c, ch in enumerate(line.strip()):
            if ch == "#":
                cells.append((r, c))
            elif ch != ".":
                raise ParseError(f"Unexpected character {ch!r} at row {r}, col {c}")
    if not cells:
        raise ParseError("No elves in input")
    return config.enforce_dtype(cells, "int")


def _snapshot(positions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Occupancy grid with a one-cell margin, and each elf's grid index."""
    origin = positions.min(axis=0) - 1
    local = positions - origin
    shape = local.max(axis=0) + 2
    grid = np.zeros(tuple(shape), dtype=config.BOOL_DTYPE)
    grid[local[:, 0], local[:, 1]] = True
    return grid, local


def play_round(positions: np.ndarray, round_index: int) -> Tuple[np.ndarray, int]:
    """One round of proposals and moves.

    Args:
        positions: (n, 2) elf positions; not modified
        round_index: 0-based round number (selects the direction order)

    Returns:
        (new positions, number of elves that moved)
    """
    grid, local = _snapshot(positions)
    rows, cols = local[:, 0], local[:, 1]

    def occupied(dr: int, dc: int) -> np.ndarray:
        return grid[rows + dr, cols + dc]

    crowded = np.zeros(len(positions), dtype=config.BOOL_DTYPE)
    for dr, dc in NEIGHBORHOOD8:
        crowded |= occupied(dr, dc)

    step = np.zeros_like(positions)
    undecided = crowded.copy()
    for k in range(len(ORDER)):
        (sr, sc), checks = DIRECTIONS[ORDER[(round_index + k) % len(ORDER)]]
        free = np.ones(len(positions), dtype=config.BOOL_DTYPE)
        for dr, dc in checks:
            free &= ~occupied(dr, dc)
        choose = undecided & free
        step[choose] = (sr, sc)
        undecided &= ~choose

    movers = np.flatnonzero(step.any(axis=1))
    if len(movers) == 0:
        return positions, 0

    # Targets stay within the margin, so a flat index identifies the cell
    targets = local[movers] + step[movers]
    keys = targets[:, 0] * grid.shape[1] + targets[:, 1]
    _, inverse, counts = np.unique(keys, return_inverse=True, return_counts=True)
    movers = movers[counts[inverse] == 1]

    moved = positions.copy()
    moved[movers] += step[movers]
    return moved, len(movers)


def empty_ground(positions: np.ndarray) -> int:
    """Empty cells in the bounding box of all elves."""
    span = positions.max(axis=0) - positions.min(axis=0) + 1
    return int(span[0] * span[1]) - len(positions)


def solve_part1(positions: np.ndarray, rounds: int = config.ELF_ROUNDS, stats: Optional[Dict] = None) -> int:
    for i in range(rounds):
        positions, _ = play_round(positions, i)
    if stats is not None:
        stats["elves"] = len(positions)
    return empty_ground(positions)


def solve_part2(
    positions: np.ndarray, max_rounds: int = config.ELF_MAX_ROUNDS, stats: Optional[Dict] = None
) -> int:
    for i in range(max_rounds):
        positions, moved = play_round(positions, i)
        if moved == 0:
            if stats is not None:
                stats["elves"] = len(positions)
            return i + 1
    raise NoSolutionError(f"Elves still moving after {max_rounds} rounds")
