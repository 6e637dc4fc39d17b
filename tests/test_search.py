"""bounded_search and combine_disjoint on small hand-checked instances."""
from __future__ import annotations
import pytest

from aocsearch import valves
from aocsearch.graph import GraphDistanceIndex
from aocsearch.search import bounded_search, combine_disjoint
from aocsearch.types import Budget, Edge, SearchResult, SearchState

VALUES = {"B": 10, "C": 10, "D": 10}


@pytest.fixture
def table():
    index = GraphDistanceIndex(
        [Edge("A", "B", 1), Edge("B", "C", 1), Edge("C", "D", 1), Edge("A", "D", 3)]
    )
    return index.table(list(VALUES), sources=["A"] + list(VALUES))


# ============================================================================
# Single actor
# ============================================================================
def test_single_actor_best(table):
    # Open B at minute 2 (30), then C at minute 4 (10)
    result = valves.tour_search(table, VALUES, "A", 5, open_cost=1)
    assert isinstance(result, SearchResult)
    assert result.best == 40


def test_two_actor_disjoint(table):
    result = valves.tour_search(table, VALUES, "A", 5, open_cost=1, collect=True)
    assert result.best == 40
    assert frozenset({"B", "C"}) in result.by_progress
    assert combine_disjoint(result.by_progress) == 50


def test_budget_monotonic(table):
    bests = [valves.tour_search(table, VALUES, "A", m, open_cost=1).best for m in range(10)]
    assert bests[0] == 0
    assert all(a <= b for a, b in zip(bests, bests[1:]))


def test_frontiers_agree(table):
    budget = Budget(7)
    expand = valves.make_expander(table, VALUES, budget, 1)
    bound = valves.make_bound(VALUES, budget, 1)
    initial = SearchState("A")
    lifo = bounded_search(initial, expand, budget, frontier="lifo")
    lifo_pruned = bounded_search(initial, expand, budget, upper_bound=bound, frontier="lifo")
    best_first = bounded_search(initial, expand, budget, upper_bound=bound, frontier="priority")
    assert lifo.best == lifo_pruned.best == best_first.best
    assert best_first.expanded <= lifo.expanded


def test_search_is_deterministic(table):
    a = valves.tour_search(table, VALUES, "A", 6, open_cost=1)
    b = valves.tour_search(table, VALUES, "A", 6, open_cost=1)
    assert a.stats() == b.stats()


# ============================================================================
# Contract violations
# ============================================================================
def test_unknown_frontier():
    with pytest.raises(ValueError):
        bounded_search(SearchState(0), lambda s: [], Budget(3), frontier="fifo")


def test_child_back_in_time():
    def expand(state):
        yield SearchState(state.node, state.time - 1)

    with pytest.raises(ValueError):
        bounded_search(SearchState(0, time=2), expand, Budget(5))


def test_children_beyond_budget_dropped():
    def expand(state):
        yield state.advance(state.node + 1, 2, gained=1)

    result = bounded_search(SearchState(0), expand, Budget(5))
    # times 0, 2, 4; a child at 6 is beyond the limit
    assert result.best == 2


def test_exhausted_budget_expands_nothing():
    result = bounded_search(SearchState("x", value=7), lambda s: [s.advance("y", 1, 1)], Budget(0))
    assert result.best == 7
    assert result.expanded == 0


def test_state_advance_is_pure():
    state = SearchState("a", 1, 5, frozenset({"a"}))
    child = state.advance("b", 2, gained=3, mark="b")
    assert state == SearchState("a", 1, 5, frozenset({"a"}))
    assert child == SearchState("b", 3, 8, frozenset({"a", "b"}))
    with pytest.raises(ValueError):
        state.advance("c", -1)


def test_budget_remaining():
    budget = Budget(10)
    assert budget.remaining(SearchState(0, time=4)) == 6
    assert budget.remaining(SearchState(0, time=12)) == 0
    assert budget.exhausted(SearchState(0, time=10))
    with pytest.raises(ValueError):
        Budget(-1)


# ============================================================================
# Disjoint pairing
# ============================================================================
def _collected(pairs):
    return {frozenset(p): SearchState(None, value=v, progress=frozenset(p)) for p, v in pairs}


def test_combine_disjoint_empty():
    assert combine_disjoint({}) == 0


def test_combine_disjoint_skips_overlap():
    collected = _collected([("ab", 10), ("bc", 9), ("c", 4), ("d", 3)])
    # ab + c = 14 beats ab + d and bc + d
    assert combine_disjoint(collected) == 14


def test_combine_disjoint_workers_agree():
    marks = "abcdefgh"
    pairs = [((marks[i], marks[(i * 3 + 1) % 8]), (i * 7) % 11 + i) for i in range(8)]
    pairs += [((m,), ord(m) % 5) for m in marks]
    collected = _collected(pairs)
    assert combine_disjoint(collected, workers=1) == combine_disjoint(collected, workers=3)
