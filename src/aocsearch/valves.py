"""valves.py - Day 16: pressure released by opening valves within a time limit.

Pipeline:
- parse: "Valve AA has flow rate=0; tunnels lead to valves DD, II, BB"
- GraphDistanceIndex over the tunnel graph, distances from the start valve
  and every valve with positive flow, targets ordered by descending flow
- bounded_search over tours: moving to an unopened valve and opening it
  credits flow * (minutes left after opening)

Part 1 searches best-first with an admissible bound. Part 2 (two actors)
collects the best tour per set of opened valves and pairs disjoint sets.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from . import config
from .errors import NoSolutionError, ParseError
from .graph import DistanceTable, GraphDistanceIndex
from .search import bounded_search, combine_disjoint
from .types import Budget, SearchResult, SearchState

VALVE_RE = re.compile(
    r"^Valve (?P<name>\w+) has flow rate=(?P<flow>\d+); "
    r"tunnels? leads? to valves? (?P<tunnels>.+)$"
)


@dataclass(frozen=True)
class Valve:
    """One valve and the tunnels leaving it."""

    name: str
    flow: int
    tunnels: Tuple[str, ...]


def parse(text: str) -> List[Valve]:
    """Parse valve descriptions, one per non-empty line.

    Raises:
        ParseError: If a line does not describe a valve
    """
    valves = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        m = VALVE_RE.match(line)
        if m is None:
            raise ParseError(f"Line {lineno}: not a valve description: {line!r}")
        tunnels = tuple(t.strip() for t in m.group("tunnels").split(","))
        valves.append(Valve(m.group("name"), int(m.group("flow")), tunnels))
    return valves


def build_table(valves: List[Valve], start: str) -> Optional[DistanceTable]:
    """Distances from start and each flowing valve to every flowing valve.

    Returns:
        DistanceTable with rows ordered by descending flow, or None if the
        start valve does not exist
    """
    adjacency = {v.name: v.tunnels for v in valves}
    if start not in adjacency:
        return None
    flows = {v.name: v.flow for v in valves}
    relevant = [v.name for v in valves if v.flow > 0]
    index = GraphDistanceIndex.from_adjacency(adjacency, directed=True)
    return index.table(
        relevant,
        sources=[start] + relevant,
        order_key=lambda target, dist: -flows[target],
    )


def make_expander(
    table: Mapping, values: Mapping, budget: Budget, open_cost: int
):
    """Expansion: walk to each unopened valve in the table and open it."""

    def expand(state: SearchState) -> Iterator[SearchState]:
        here = state.node
        if values.get(here, 0) > 0 and here not in state.progress:
            t = state.time + open_cost
            if t < budget.limit:
                yield state.advance(here, open_cost, values[here] * (budget.limit - t), mark=here)
        for target, dist in table.get(here, ()):
            if target in state.progress:
                continue
            t = state.time + dist + open_cost
            if t >= budget.limit:
                continue
            yield state.advance(
                target, dist + open_cost, values[target] * (budget.limit - t), mark=target
            )

    return expand


def make_bound(values: Mapping, budget: Budget, open_cost: int):
    """Admissible bound: remaining valves opened back to back, biggest first.

    The k-th further opening cannot happen before
    time + open_cost + k * (1 + open_cost): distinct valves are at least one
    minute apart.
    """
    ordered = sorted(((v, n) for n, v in values.items() if v > 0), reverse=True)

    def bound(state: SearchState) -> int:
        total = 0
        slot = state.time + open_cost
        for value, name in ordered:
            if name in state.progress:
                continue
            if slot >= budget.limit:
                break
            total += value * (budget.limit - slot)
            slot += 1 + open_cost
        return total

    return bound


def tour_search(
    table: Mapping,
    values: Mapping,
    start,
    minutes: int,
    open_cost: int = config.VALVE_OPEN_COST,
    collect: bool = False,
) -> SearchResult:
    """Run the tour search over a prepared distance table.

    Single-actor runs go best-first with pruning; collecting runs go
    depth-first without pruning.
    """
    budget = Budget(minutes)
    expand = make_expander(table, values, budget, open_cost)
    initial = SearchState(start)
    if collect:
        return bounded_search(initial, expand, budget, frontier="lifo", collect=True)
    return bounded_search(
        initial, expand, budget, upper_bound=make_bound(values, budget, open_cost), frontier="priority"
    )


def search_valves(
    valves: List[Valve],
    minutes: int,
    start: str = config.VALVE_START,
    open_cost: int = config.VALVE_OPEN_COST,
    collect: bool = False,
) -> Optional[SearchResult]:
    """Best tour from start; None if the start valve is missing."""
    table = build_table(valves, start)
    if table is None:
        return None
    values = {v.name: v.flow for v in valves}
    return tour_search(table, values, start, minutes, open_cost=open_cost, collect=collect)


def _prepared(valves: List[Valve], start: str, stats: Optional[Dict]):
    table = build_table(valves, start)
    if table is None:
        raise NoSolutionError(f"Start valve {start} not found")
    if stats is not None:
        stats["distances"] = table.to_payload()
    return table, {v.name: v.flow for v in valves}


def solve_part1(
    valves: List[Valve],
    minutes: int = config.VALVE_MINUTES,
    start: str = config.VALVE_START,
    open_cost: int = config.VALVE_OPEN_COST,
    stats: Optional[Dict] = None,
) -> int:
    table, values = _prepared(valves, start, stats)
    result = tour_search(table, values, start, minutes, open_cost=open_cost)
    if stats is not None:
        stats.update(result.stats())
    return result.best


def solve_part2(
    valves: List[Valve],
    minutes: int = config.VALVE_PAIR_MINUTES,
    start: str = config.VALVE_START,
    open_cost: int = config.VALVE_OPEN_COST,
    workers: int = config.DEFAULT_WORKERS,
    stats: Optional[Dict] = None,
) -> int:
    table, values = _prepared(valves, start, stats)
    result = tour_search(table, values, start, minutes, open_cost=open_cost, collect=True)
    if stats is not None:
        stats.update(result.stats())
    return combine_disjoint(result.by_progress, workers=workers)
