"""simulation.py - Deterministic step simulation with cycle extrapolation.

simulate_periodic runs a step function forward, recording a signature of the
configuration before every step together with the cumulative measurement.
The first repeated signature defines a cycle (warmup, length, delta); the
answer for a far-away target is then

    measure[warmup + remainder] + k * delta

with remainder = (target - warmup) % length and
k = (target - warmup - remainder) // length.

The signature must pin down all future behaviour (e.g. tower-top snapshot
plus generator indices). An under-specified signature, or a step function
that is not deterministic, yields a wrong but well-defined answer.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Hashable, List, Tuple

from .types import CycleReport, PeriodicResult

StepFn = Callable[[Any], Tuple[Any, int]]
SignatureFn = Callable[[Any], Hashable]


def extrapolate(measures: List[int], cycle: CycleReport, target: int) -> int:
    """Measurement after target steps, given the cycle and recorded prefix.

    Args:
        measures: Cumulative measurement per step index; must cover
            indices up to warmup + length - 1
        cycle: Detected cycle
        target: Step count (>= warmup)

    Returns:
        Extrapolated measurement
    """
    remainder = (target - cycle.warmup) % cycle.length
    k = (target - cycle.warmup - remainder) // cycle.length
    return measures[cycle.warmup + remainder] + k * cycle.delta


def simulate_periodic(
    initial: Any,
    step: StepFn,
    signature: SignatureFn,
    target: int,
) -> PeriodicResult:
    """Measurement after target steps, extrapolating once a cycle appears.

    Args:
        initial: Starting configuration (may be mutated by step)
        step: config -> (next config, measurement delta)
        signature: config -> hashable summary of everything that drives the
            future of the simulation
        target: Number of steps wanted (may be astronomically large)

    Returns:
        PeriodicResult with value, steps simulated and the cycle (if any)

    Raises:
        ValueError: If target is negative
    """
    if target < 0:
        raise ValueError(f"Target step count must be non-negative, got {target}")

    history: Dict[Hashable, int] = {}
    measures: List[int] = [0]
    config = initial
    index = 0
    while True:
        if index == target:
            return PeriodicResult(value=measures[index], steps=index)

        sig = signature(config)
        first = history.get(sig)
        if first is not None:
            cycle = CycleReport(
                warmup=first,
                length=index - first,
                delta=measures[index] - measures[first],
            )
            value = extrapolate(measures, cycle, target)
            return PeriodicResult(value=value, steps=index, cycle=cycle)
        history[sig] = index

        config, delta = step(config)
        measures.append(measures[-1] + delta)
        index += 1
