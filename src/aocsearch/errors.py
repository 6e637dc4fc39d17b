"""errors.py - Exception types shared by the engines, solvers and harness.

The engines report "no solution" as a return value (None); the solvers turn
that into NoSolutionError so the harness can stop a single day and move on.
"""
from __future__ import annotations


class PuzzleError(Exception):
    """Base class for everything that aborts one day's computation."""


class ParseError(PuzzleError, ValueError):
    """Malformed puzzle input."""


class NodeNotFoundError(PuzzleError, KeyError):
    """A query referenced a node the graph does not contain."""

    def __init__(self, node):
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"Unknown node: {self.node!r}"


class NoSolutionError(PuzzleError):
    """An engine finished without producing an answer."""
