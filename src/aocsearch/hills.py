"""hills.py - Day 12: fewest steps up a heightmap to the signal.

The heightmap becomes a grid graph with an edge u -> v whenever v is at most
MAX_CLIMB higher than u. Distances are taken once from the goal on the
reversed graph, which answers both parts from a single Dijkstra row:
part 1 reads the marked start, part 2 the closest lowest cell.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from . import config
from .errors import NoSolutionError, ParseError
from .graph import GraphDistanceIndex

Coords = Tuple[int, int]  # (row, col)

NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class Heightmap:
    """Parsed heightmap.

    Attributes:
        heights: int8 array (rows, cols), 0 = 'a' .. 25 = 'z'
        start: Cell marked S (height 'a')
        goal: Cell marked E (height 'z')
    """

    heights: np.ndarray
    start: Coords
    goal: Coords


def parse(text: str) -> Heightmap:
    """Parse the letter grid.

    Raises:
        ParseError: On ragged rows, unknown characters, or missing S/E
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines or any(len(line) != len(lines[0]) for line in lines):
        raise ParseError("Heightmap must be a non-empty rectangle")

    start = goal = None
    rows = []
    for r, line in enumerate(lines):
        row = []
        for c, ch in enumerate(line):
            if ch == "S":
                start, ch = (r, c), "a"
            elif ch == "E":
                goal, ch = (r, c), "z"
            if not "a" <= ch <= "z":
                raise ParseError(f"Unexpected character {ch!r} at row {r}, col {c}")
            row.append(ord(ch) - ord("a"))
        rows.append(row)
    if start is None or goal is None:
        raise ParseError("Heightmap needs both S and E")
    return Heightmap(config.enforce_dtype(rows, "grid"), start, goal)


def descent_index(hmap: Heightmap, max_climb: int = config.MAX_CLIMB) -> GraphDistanceIndex:
    """Reversed climbing graph: v -> u whenever u may step up to v."""
    heights = hmap.heights
    n_rows, n_cols = heights.shape
    adjacency: Dict[Coords, List[Coords]] = {}
    for r in range(n_rows):
        for c in range(n_cols):
            here = int(heights[r, c])
            down = []
            for dr, dc in NEIGHBORS:
                nr, nc = r + dr, c + dc
                if 0 <= nr < n_rows and 0 <= nc < n_cols and here - int(heights[nr, nc]) <= max_climb:
                    down.append((nr, nc))
            adjacency[(r, c)] = down
    return GraphDistanceIndex.from_adjacency(adjacency, directed=True)


def _lowest_cells(hmap: Heightmap) -> List[Coords]:
    rows, cols = np.nonzero(hmap.heights == 0)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def solve_part1(hmap: Heightmap, stats: Optional[Dict] = None) -> int:
    index = descent_index(hmap)
    steps = index.distance(hmap.goal, hmap.start)
    if stats is not None:
        stats.update({"nodes": len(index), "edges": index.edge_count})
    if steps is None:
        raise NoSolutionError("Signal is unreachable from the start")
    return steps


def solve_part2(hmap: Heightmap, stats: Optional[Dict] = None) -> int:
    index = descent_index(hmap)
    table = index.table(_lowest_cells(hmap), sources=[hmap.goal])
    row = table[hmap.goal]
    if stats is not None:
        stats.update({"nodes": len(index), "edges": index.edge_count, "reachable_starts": len(row)})
    if not row:
        raise NoSolutionError("Signal is unreachable from every lowest cell")
    return row[0][1]
