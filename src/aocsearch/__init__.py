"""aocsearch - Search and simulation engines for Advent of Code 2022 puzzles.

Three generic engines carry the hard puzzles:
- graph: all-pairs distances over small labelled graphs (scipy csgraph),
  plus heap Dijkstra over implicit graphs
- search: budgeted branch-and-bound search over states with value and
  progress, and disjoint pairing for two-actor variants
- simulation: step simulation that detects a repeating configuration and
  extrapolates to astronomically large step counts

Puzzle modules (parse + solve_part1/solve_part2 each):
- filesystem (day 7), hills (day 12), sand (day 14), valves (day 16),
  rocks (day 17), robots (day 19), elves (day 23), blizzards (day 24)

Ambient modules:
- config: Determinism guards, version asserts, dtypes, puzzle constants
- errors: PuzzleError hierarchy
- receipts: JSON receipts per solved day
- harness: CLI runner and benchmark
- utils: Hash utilities (byte-stable SHA256)
"""
from __future__ import annotations

# Version
__version__ = "0.1.0"

# Expose key types and functions at package level
from . import config
from .errors import NoSolutionError, NodeNotFoundError, ParseError, PuzzleError
from .graph import DistanceTable, GraphDistanceIndex, shortest_path_length
from .search import bounded_search, combine_disjoint
from .simulation import simulate_periodic
from .types import Budget, CycleReport, Edge, PeriodicResult, SearchResult, SearchState

__all__ = [
    "Budget",
    "CycleReport",
    "DistanceTable",
    "Edge",
    "GraphDistanceIndex",
    "NoSolutionError",
    "NodeNotFoundError",
    "ParseError",
    "PeriodicResult",
    "PuzzleError",
    "SearchResult",
    "SearchState",
    "bounded_search",
    "combine_disjoint",
    "config",
    "shortest_path_length",
    "simulate_periodic",
]
