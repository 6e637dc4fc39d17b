"""robots.py - Day 19: most geodes a robot factory can crack in time.

Search node = (robots, stock) over ore/clay/obsidian. Instead of stepping
minute by minute, each transition picks the next robot to build and jumps
straight to the minute it finishes. Geode robots are not part of the node:
building one credits every geode it will crack before the deadline.

Pruning:
- never hold more robots of a kind than the largest cost that spends it
- admissible bound from a relaxed factory that gets a free obsidian robot
  every minute and buys a geode robot whenever obsidian allows
"""
from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from . import config
from .errors import ParseError
from .search import bounded_search
from .types import Budget, SearchResult, SearchState

ORE, CLAY, OBSIDIAN, GEODE = range(4)

BLUEPRINT_RE = re.compile(
    r"Blueprint (\d+):\s*"
    r"Each ore robot costs (\d+) ore\.\s*"
    r"Each clay robot costs (\d+) ore\.\s*"
    r"Each obsidian robot costs (\d+) ore and (\d+) clay\.\s*"
    r"Each geode robot costs (\d+) ore and (\d+) obsidian\."
)

Vector = Tuple[int, int, int]


@dataclass(frozen=True)
class Blueprint:
    """Robot costs as (ore, clay, obsidian) per robot kind.

    Attributes:
        number: Blueprint id
        costs: One cost vector for ore, clay, obsidian and geode robots
    """

    number: int
    costs: Tuple[Vector, Vector, Vector, Vector]

    @property
    def max_spend(self) -> Vector:
        """Most of each resource any single robot costs."""
        return tuple(max(cost[r] for cost in self.costs) for r in range(3))


def parse(text: str) -> List[Blueprint]:
    """Parse blueprints; one blueprint may wrap over several lines.

    Raises:
        ParseError: If no blueprint is found
    """
    blueprints = []
    for m in BLUEPRINT_RE.finditer(text):
        n, ore, clay, obs_ore, obs_clay, geo_ore, geo_obs = (int(g) for g in m.groups())
        blueprints.append(
            Blueprint(
                n,
                (
                    (ore, 0, 0),
                    (clay, 0, 0),
                    (obs_ore, obs_clay, 0),
                    (geo_ore, 0, geo_obs),
                ),
            )
        )
    if not blueprints:
        raise ParseError("No blueprint found in input")
    return blueprints


def make_expander(blueprint: Blueprint, budget: Budget):
    """Expansion: choose the next robot and wait until it is built."""
    limit = budget.limit
    max_spend = blueprint.max_spend

    def expand(state: SearchState) -> Iterator[SearchState]:
        robots, stock = state.node
        for kind in (GEODE, OBSIDIAN, CLAY, ORE):
            if kind != GEODE and robots[kind] >= max_spend[kind]:
                continue
            cost = blueprint.costs[kind]
            wait = 0
            for r in range(3):
                need = cost[r] - stock[r]
                if need <= 0:
                    continue
                if robots[r] == 0:
                    wait = None
                    break
                wait = max(wait, -(-need // robots[r]))
            if wait is None:
                continue
            elapsed = wait + 1
            done = state.time + elapsed
            if done >= limit:
                continue
            new_stock = tuple(stock[r] + robots[r] * elapsed - cost[r] for r in range(3))
            if kind == GEODE:
                yield state.advance((robots, new_stock), elapsed, limit - done)
            else:
                new_robots = tuple(n + 1 if r == kind else n for r, n in enumerate(robots))
                yield state.advance((new_robots, new_stock), elapsed)

    return expand


def make_bound(blueprint: Blueprint, budget: Budget):
    """Geodes a relaxed factory could still add (never an underestimate)."""
    geode_obsidian = blueprint.costs[GEODE][OBSIDIAN]
    limit = budget.limit

    def bound(state: SearchState) -> int:
        robots, stock = state.node
        obsidian = stock[OBSIDIAN]
        rate = robots[OBSIDIAN]
        gains = 0
        for minute in range(state.time, limit):
            if obsidian >= geode_obsidian:
                obsidian += rate - geode_obsidian
                gains += limit - (minute + 1)
            else:
                obsidian += rate
            rate += 1
        return gains

    return bound


def max_geodes(blueprint: Blueprint, minutes: int) -> SearchResult:
    """Best geode count for one blueprint."""
    budget = Budget(minutes)
    initial = SearchState(((1, 0, 0), (0, 0, 0)))
    return bounded_search(
        initial,
        make_expander(blueprint, budget),
        budget,
        upper_bound=make_bound(blueprint, budget),
        frontier="priority",
    )


def solve_part1(
    blueprints: List[Blueprint], minutes: int = config.GEODE_MINUTES, stats: Optional[Dict] = None
) -> int:
    total = 0
    for bp in blueprints:
        result = max_geodes(bp, minutes)
        if stats is not None:
            stats[f"blueprint_{bp.number}"] = result.stats()
        total += bp.number * result.best
    return total


def solve_part2(
    blueprints: List[Blueprint],
    minutes: int = config.GEODE_MINUTES_LONG,
    count: int = config.GEODE_BLUEPRINTS_LONG,
    stats: Optional[Dict] = None,
) -> int:
    bests = []
    for bp in blueprints[:count]:
        result = max_geodes(bp, minutes)
        if stats is not None:
            stats[f"blueprint_{bp.number}"] = result.stats()
        bests.append(result.best)
    return math.prod(bests)
