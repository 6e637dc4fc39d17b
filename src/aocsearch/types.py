"""types.py - Canonical dataclasses shared by the search and simulation engines.

Defines immutable dataclasses used throughout the engines:
- Edge: weighted transition between two nodes
- Budget: resource ceiling of one search run
- SearchState: point-in-time snapshot of search progress
- SearchResult: outcome of a bounded search
- CycleReport / PeriodicResult: outcome of a periodic simulation

Nodes themselves are plain hashable values (strings, coordinate tuples,
composite tuples); equality and hashing are structural.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, Optional

Node = Hashable


@dataclass(frozen=True)
class Edge:
    """Weighted transition.

    Attributes:
        source: Origin node
        target: Destination node
        cost: Non-negative integer weight
    """

    source: Node
    target: Node
    cost: int = 1

    def __post_init__(self):
        if self.cost < 0:
            raise ValueError(f"Edge cost must be non-negative, got {self.cost}")


@dataclass(frozen=True)
class Budget:
    """Immutable resource ceiling shared read-only by all states of a run.

    Attributes:
        limit: Maximum time/steps consumable
    """

    limit: int

    def __post_init__(self):
        if self.limit < 0:
            raise ValueError(f"Budget must be non-negative, got {self.limit}")

    def remaining(self, state: "SearchState") -> int:
        """Return budget left after state.time (never negative)."""
        return max(0, self.limit - state.time)

    def exhausted(self, state: "SearchState") -> bool:
        """Return True if state has no budget left."""
        return state.time >= self.limit


@dataclass(frozen=True)
class SearchState:
    """Snapshot of search progress.

    Attributes:
        node: Current position (any hashable)
        time: Accumulated time/cost
        value: Accumulated value, credited up to the end of the budget
        progress: Sub-goals already satisfied (order-irrelevant, unique)
    """

    node: Node
    time: int = 0
    value: int = 0
    progress: FrozenSet[Node] = frozenset()

    def advance(
        self, node: Node, elapsed: int, gained: int = 0, mark: Optional[Node] = None
    ) -> "SearchState":
        """Derive a child state; self is left untouched.

        Args:
            node: Child position
            elapsed: Time consumed by the transition (>= 0)
            gained: Value added by the transition
            mark: Optional sub-goal satisfied by the transition

        Returns:
            New SearchState

        Raises:
            ValueError: If elapsed is negative
        """
        if elapsed < 0:
            raise ValueError(f"Transitions cannot go back in time (elapsed={elapsed})")
        progress = self.progress if mark is None else self.progress | {mark}
        return SearchState(node, self.time + elapsed, self.value + gained, progress)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of bounded_search.

    Attributes:
        best: Best value over all states reached
        expanded: Number of states expanded
        pruned: Number of states discarded by the bound
        by_progress: Best state per progress set (filled only when collecting)
    """

    best: int
    expanded: int = 0
    pruned: int = 0
    by_progress: Dict[FrozenSet[Node], SearchState] = field(default_factory=dict)

    def stats(self) -> Dict[str, Any]:
        """Return JSON-friendly counters for receipts."""
        return {
            "best": int(self.best),
            "expanded": int(self.expanded),
            "pruned": int(self.pruned),
            "progress_sets": len(self.by_progress),
        }


@dataclass(frozen=True)
class CycleReport:
    """Repeating unit detected by a periodic simulation.

    Attributes:
        warmup: Step index of the first occurrence of the repeated signature
        length: Steps between the two occurrences
        delta: Measurement gained over one cycle
    """

    warmup: int
    length: int
    delta: int

    def __post_init__(self):
        if self.length <= 0:
            raise ValueError(f"Cycle length must be positive, got {self.length}")


@dataclass(frozen=True)
class PeriodicResult:
    """Outcome of simulate_periodic.

    Attributes:
        value: Measurement after the target number of steps
        steps: Steps actually simulated
        cycle: Detected cycle, or None if the target was reached first
    """

    value: int
    steps: int
    cycle: Optional[CycleReport] = None

    def stats(self) -> Dict[str, Any]:
        """Return JSON-friendly counters for receipts."""
        payload: Dict[str, Any] = {"value": int(self.value), "steps": int(self.steps)}
        if self.cycle is not None:
            payload["cycle"] = {
                "warmup": self.cycle.warmup,
                "length": self.cycle.length,
                "delta": int(self.cycle.delta),
            }
        return payload
