"""sand.py - Day 14: sand pouring into a cave of rock paths.

Rock paths are rasterised into a numpy bool grid indexed [y, x - offset].
Grains fall down, then down-left, then down-right, and rest when all three
are blocked. The falling path of the previous grain is kept as a stack, so
every grain resumes from where the last one came to rest instead of from
the source.
"""
from __future__ import annotations
from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from . import config
from .errors import ParseError

Coords = Tuple[int, int]


def _parse_point(token: str, lineno: int) -> Coords:
    parts = token.strip().split(",")
    if len(parts) != 2:
        raise ParseError(f"Line {lineno}: bad coordinate {token!r}")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        raise ParseError(f"Line {lineno}: bad coordinate {token!r}") from None


def parse(text: str) -> FrozenSet[Coords]:
    """Rock cells (x, y) covered by the "x,y -> x,y -> ..." paths.

    Raises:
        ParseError: On malformed coordinates or diagonal segments
    """
    rocks = set()
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        points = [_parse_point(tok, lineno) for tok in line.split("->")]
        if len(points) == 1:
            rocks.add(points[0])
        for (ax, ay), (bx, by) in zip(points, points[1:]):
            if ax != bx and ay != by:
                raise ParseError(f"Line {lineno}: diagonal segment {ax},{ay} -> {bx},{by}")
            for x in range(min(ax, bx), max(ax, bx) + 1):
                for y in range(min(ay, by), max(ay, by) + 1):
                    rocks.add((x, y))
    if not rocks:
        raise ParseError("Empty rock formation")
    return frozenset(rocks)


def build_cave(
    rocks: FrozenSet[Coords], source: Coords = config.SAND_SOURCE, floor_offset: int = config.FLOOR_OFFSET
) -> Tuple[np.ndarray, int, int]:
    """Occupancy grid wide enough for the full sand pile.

    Returns:
        (grid, x_offset, lowest_rock_y); grid rows run to the floor row
    """
    lowest = max(y for _, y in rocks)
    floor_y = lowest + floor_offset
    sx = source[0]
    left = min(min(x for x, _ in rocks), sx - floor_y - 1)
    right = max(max(x for x, _ in rocks), sx + floor_y + 1)

    grid = np.zeros((floor_y + 1, right - left + 1), dtype=config.BOOL_DTYPE)
    coords = config.enforce_dtype(sorted(rocks), "int")
    grid[coords[:, 1], coords[:, 0] - left] = True
    return grid, left, lowest


def pour(grid: np.ndarray, source_col: int, source_row: int = 0, abyss_row: Optional[int] = None) -> int:
    """Pour grains until one reaches abyss_row or the source is blocked.

    Args:
        grid: bool occupancy [y, x]; updated in place with resting sand
        source_col: Column of the source in grid coordinates
        source_row: Row of the source
        abyss_row: Grains reaching this row fall forever (None: never)

    Returns:
        Number of grains that came to rest
    """
    rested = 0
    path: List[Coords] = [(source_row, source_col)]
    while path:
        y, x = path[-1]
        if abyss_row is not None and y >= abyss_row:
            break
        for dx in (0, -1, 1):
            if not grid[y + 1, x + dx]:
                path.append((y + 1, x + dx))
                break
        else:
            grid[y, x] = True
            rested += 1
            path.pop()
    return rested


def solve_part1(
    rocks: FrozenSet[Coords], source: Coords = config.SAND_SOURCE, stats: Optional[Dict] = None
) -> int:
    grid, left, lowest = build_cave(rocks, source)
    rested = pour(grid, source[0] - left, source[1], abyss_row=lowest)
    if stats is not None:
        stats["cave_shape"] = list(grid.shape)
    return rested


def solve_part2(
    rocks: FrozenSet[Coords],
    source: Coords = config.SAND_SOURCE,
    floor_offset: int = config.FLOOR_OFFSET,
    stats: Optional[Dict] = None,
) -> int:
    grid, left, _ = build_cave(rocks, source, floor_offset)
    grid[-1, :] = True
    rested = pour(grid, source[0] - left, source[1])
    if stats is not None:
        stats["cave_shape"] = list(grid.shape)
    return rested
