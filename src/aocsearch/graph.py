"""graph.py - Pairwise shortest distances over small labelled graphs.

GraphDistanceIndex stores every node once in an arena list and refers to it
by integer index; edges become a scipy CSR matrix and distances come from
scipy.sparse.csgraph.dijkstra, one row per source.

Also provides shortest_path_length, a heap-based Dijkstra over implicit
graphs (successor functions), for state spaces too large or too dynamic to
materialise as a matrix.

Notes:
- Edge weights inside the index must be strictly positive: a CSR matrix
  cannot tell a zero-weight edge from a missing one.
- Unknown nodes raise NodeNotFoundError; unreachable pairs are omitted
  from tables and reported as None by distance().
"""
from __future__ import annotations
import heapq
import itertools
import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import dijkstra

from .errors import NodeNotFoundError
from .types import Edge

Node = Hashable
TargetRow = Tuple[Tuple[Node, int], ...]


class DistanceTable(Mapping):
    """Read-only mapping source -> ((target, distance), ...).

    Produced once by GraphDistanceIndex.table() and only read afterwards.
    """

    def __init__(self, rows: Dict[Node, TargetRow]):
        self._rows = MappingProxyType(dict(rows))

    def __getitem__(self, source: Node) -> TargetRow:
        return self._rows[source]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"DistanceTable({dict(self._rows)!r})"

    def to_payload(self) -> Dict[str, List[List]]:
        """Return JSON-friendly form (node reprs as keys) for receipts."""
        return {
            str(src): [[str(t), d] for t, d in row] for src, row in self._rows.items()
        }


class GraphDistanceIndex:
    """All-pairs distances between the relevant nodes of a small graph.

    Args:
        edges: Weighted edges (cost > 0)
        directed: If False, every edge can be walked both ways
        nodes: Extra isolated nodes to register (optional)

    Notes:
        Only the CSR matrix is kept; Dijkstra rows are recomputed by each
        distance() or table() call and dropped afterwards.

    Raises:
        ValueError: If an edge has zero cost
    """

    def __init__(
        self, edges: Iterable[Edge], directed: bool = False, nodes: Iterable[Node] = ()
    ):
        self.directed = directed
        self.nodes: List[Node] = []
        self.index: Dict[Node, int] = {}
        for node in nodes:
            self._intern(node)

        # Parallel edges keep the cheapest cost
        weights: Dict[Tuple[int, int], int] = {}
        for edge in edges:
            if edge.cost == 0:
                raise ValueError(
                    f"Zero-cost edge {edge.source!r}->{edge.target!r} cannot be indexed; "
                    "use shortest_path_length for zero-cost graphs"
                )
            i = self._intern(edge.source)
            j = self._intern(edge.target)
            if i == j:
                continue
            key = (i, j)
            if key not in weights or edge.cost < weights[key]:
                weights[key] = edge.cost

        self.edge_count = len(weights)
        self._matrix = self._build_matrix(weights)

    @classmethod
    def from_adjacency(
        cls, adjacency: Mapping, directed: bool = True
    ) -> "GraphDistanceIndex":
        """Build a unit-weight index from node -> iterable of neighbours.

        Neighbours that never appear as a key are ignored.
        """
        edges = [
            Edge(src, dst, 1)
            for src, neighbors in adjacency.items()
            for dst in neighbors
            if dst in adjacency
        ]
        return cls(edges, directed=directed, nodes=adjacency.keys())

    # ------------------------------------------------------------------
    # Arena
    # ------------------------------------------------------------------
    def _intern(self, node: Node) -> int:
        idx = self.index.get(node)
        if idx is None:
            idx = len(self.nodes)
            self.index[node] = idx
            self.nodes.append(node)
        return idx

    def _lookup(self, node: Node) -> int:
        try:
            return self.index[node]
        except KeyError:
            raise NodeNotFoundError(node) from None

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: Node) -> bool:
        return node in self.index

    # ------------------------------------------------------------------
    # Distances
    # ------------------------------------------------------------------
    def _build_matrix(self, weights: Dict[Tuple[int, int], int]) -> csr_matrix:
        n = len(self.nodes)
        if not weights:
            return csr_matrix((n, n), dtype=np.float64)
        keys = sorted(weights)
        rows = np.fromiter((k[0] for k in keys), dtype=np.int64, count=len(keys))
        cols = np.fromiter((k[1] for k in keys), dtype=np.int64, count=len(keys))
        data = np.fromiter((weights[k] for k in keys), dtype=np.float64, count=len(keys))
        return csr_matrix((data, (rows, cols)), shape=(n, n))

    def _distance_rows(self, sources: List[int]) -> np.ndarray:
        # Rows live only for the duration of one query
        return np.atleast_2d(dijkstra(self._matrix, directed=self.directed, indices=sources))

    def distance(self, a: Node, b: Node) -> Optional[int]:
        """Shortest distance from a to b.

        Returns:
            0 if a == b, None if b is unreachable from a

        Raises:
            NodeNotFoundError: If a or b is not in the graph
        """
        i = self._lookup(a)
        j = self._lookup(b)
        if i == j:
            return 0
        value = self._distance_rows([i])[0][j]
        if not np.isfinite(value):
            return None
        return int(value)

    def table(
        self,
        relevant: Iterable[Node],
        sources: Optional[Iterable[Node]] = None,
        order_key: Optional[Callable[[Node, int], object]] = None,
    ) -> DistanceTable:
        """Distances from each source to every reachable relevant node.

        Args:
            relevant: Target nodes worth pairing
            sources: Origins (default: the relevant nodes themselves)
            order_key: Sort key (target, distance) for each source's row;
                default is ascending distance. Arena order breaks ties.

        Returns:
            DistanceTable; sources without reachable targets map to ()

        Raises:
            NodeNotFoundError: If a relevant or source node is unknown
        """
        relevant = list(dict.fromkeys(relevant))
        rel_idx = sorted(self._lookup(n) for n in relevant)
        src_nodes = relevant if sources is None else list(dict.fromkeys(sources))
        src_idx = [self._lookup(n) for n in src_nodes]
        if not src_idx:
            return DistanceTable({})

        if order_key is None:
            def order_key(target, dist):
                return dist

        rows: Dict[Node, TargetRow] = {}
        for s, dist_row in zip(src_idx, self._distance_rows(src_idx)):
            entries = [
                (self.nodes[t], int(dist_row[t]))
                for t in rel_idx
                if t != s and np.isfinite(dist_row[t])
            ]
            entries.sort(key=lambda e: order_key(e[0], e[1]))
            rows[self.nodes[s]] = tuple(entries)
        return DistanceTable(rows)


def shortest_path_length(
    start: Node,
    successors: Callable[[Node], Iterable[Tuple[Node, int]]],
    is_goal: Callable[[Node], bool],
) -> Optional[int]:
    """Dijkstra over an implicit graph.

    Args:
        start: Start node
        successors: node -> iterable of (neighbour, cost >= 0)
        is_goal: Predicate marking target nodes

    Returns:
        Cost of the cheapest path to any goal, or None if none is reachable

    Raises:
        ValueError: If successors yields a negative cost
    """
    counter = itertools.count()
    best = {start: 0}
    heap = [(0, next(counter), start)]
    while heap:
        dist, _, node = heapq.heappop(heap)
        if dist > best.get(node, math.inf):
            continue
        if is_goal(node):
            return dist
        for nxt, cost in successors(node):
            if cost < 0:
                raise ValueError(f"Negative edge cost {cost} from {node!r}")
            nd = dist + cost
            if nd < best.get(nxt, math.inf):
                best[nxt] = nd
                heapq.heappush(heap, (nd, next(counter), nxt))
    return None
