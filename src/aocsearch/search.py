"""search.py - Budgeted explicit-state search with branch-and-bound pruning.

bounded_search walks the states reachable from an initial SearchState under a
Budget, using a domain-supplied expansion function:
- "lifo" frontier: plain depth-first stack, for spaces already tightly pruned
  by the expansion itself
- "priority" frontier: best-first on value + upper bound, for spaces that
  need branch-and-bound

Expansion functions credit value up to the end of the budget (a valve opened
at minute t is credited for every remaining minute), so idling is implicit and
every reached state is a valid terminal. The answer is the best value seen.

combine_disjoint pairs the per-progress-set bests collected by one search run
into the best two-actor split (progress sets must be disjoint).
"""
from __future__ import annotations
import heapq
import itertools
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from .types import Budget, SearchResult, SearchState

FRONTIERS = ("lifo", "priority")

ExpandFn = Callable[[SearchState], Iterable[SearchState]]
BoundFn = Callable[[SearchState], int]


def bounded_search(
    initial: SearchState,
    expand: ExpandFn,
    budget: Budget,
    upper_bound: Optional[BoundFn] = None,
    frontier: str = "lifo",
    collect: bool = False,
) -> SearchResult:
    """Explore states reachable from initial within budget.

    Args:
        initial: Start state (usually empty progress, zero value)
        expand: state -> candidate child states; children must not go back
            in time and should only grow the progress set
        budget: Time ceiling; children beyond it are dropped, states at it
            are not expanded
        upper_bound: Optimistic estimate of value still obtainable from a
            state. Must never underestimate or the answer can be suboptimal.
        frontier: "lifo" or "priority"
        collect: If True, record the best state per progress set and disable
            pruning (a pruned partial tour may still be the better half of
            a two-actor split)

    Returns:
        SearchResult with the best value and search counters

    Raises:
        ValueError: On unknown frontier or a child earlier than its parent
    """
    if frontier not in FRONTIERS:
        raise ValueError(f"Unknown frontier: {frontier} (expected one of {FRONTIERS})")

    prune = upper_bound is not None and not collect
    best = initial.value
    expanded = 0
    pruned = 0
    by_progress: Dict[FrozenSet, SearchState] = {}

    def optimistic(state: SearchState) -> int:
        if upper_bound is None:
            return state.value
        return state.value + upper_bound(state)

    if frontier == "lifo":
        stack: List[SearchState] = [initial]

        def push(state: SearchState) -> None:
            stack.append(state)

        def pop() -> SearchState:
            return stack.pop()

        def pending() -> int:
            return len(stack)
    else:
        counter = itertools.count()
        heap: List[Tuple[int, int, SearchState]] = [(-optimistic(initial), next(counter), initial)]

        def push(state: SearchState) -> None:
            heapq.heappush(heap, (-optimistic(state), next(counter), state))

        def pop() -> SearchState:
            return heapq.heappop(heap)[2]

        def pending() -> int:
            return len(heap)

    while pending():
        state = pop()
        if state.value > best:
            best = state.value

        if collect:
            current = by_progress.get(state.progress)
            if current is None or state.value > current.value:
                by_progress[state.progress] = state

        if budget.exhausted(state):
            continue

        if prune and optimistic(state) <= best:
            pruned += 1
            if frontier == "priority":
                # Heap is ordered by the same bound: nothing left can win
                pruned += pending()
                break
            continue

        expanded += 1
        for child in expand(state):
            if child.time < state.time:
                raise ValueError(
                    f"Expansion went back in time: {state.time} -> {child.time}"
                )
            if child.time > budget.limit:
                continue
            push(child)

    return SearchResult(best=best, expanded=expanded, pruned=pruned, by_progress=by_progress)


def _progress_masks(by_progress: Dict[FrozenSet, SearchState]) -> List[Tuple[int, int]]:
    """Encode progress sets as bitmasks, sorted by value (highest first)."""
    bits: Dict[object, int] = {}
    masks = []
    for progress, state in by_progress.items():
        mask = 0
        for mark in progress:
            if mark not in bits:
                bits[mark] = 1 << len(bits)
            mask |= bits[mark]
        masks.append((state.value, mask))
    masks.sort(key=lambda e: -e[0])
    return masks


def _best_pair(masks: List[Tuple[int, int]], indices: Iterable[int]) -> int:
    best = 0
    top = masks[0][0]
    for i in indices:
        va, ma = masks[i]
        if va + top <= best:
            break
        for vb, mb in masks:
            if va + vb <= best:
                break
            if ma & mb == 0:
                # Sorted by value: first disjoint partner is the best one
                best = va + vb
                break
    return best


def combine_disjoint(by_progress: Dict[FrozenSet, SearchState], workers: int = 1) -> int:
    """Best total of two states whose progress sets are disjoint.

    Args:
        by_progress: Best state per progress set, from a collecting search
        workers: Thread count for scanning the pairs (read-only sharing)

    Returns:
        Best combined value (0 if nothing was collected)

    Notes:
        Exact only if the collecting search reached every useful progress
        set; otherwise a best-effort lower bound.
    """
    masks = _progress_masks(by_progress)
    if not masks:
        return 0
    if workers <= 1 or len(masks) < 2 * workers:
        return _best_pair(masks, range(len(masks)))

    chunks = [range(w, len(masks), workers) for w in range(workers)]
    with ThreadPoolExecutor(max_workers=workers) as exe:
        return max(exe.map(lambda chunk: _best_pair(masks, chunk), chunks))
