"""
Working graph used while a generation call is in progress.

Tracks per-location degree, endpoint pair multiplicity and connected
components incrementally, so that the skeleton builder and the degree
augmenter can test a candidate edge without rescanning the whole graph.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..utils.random import new_id
from .geometry import on_segment, same_point, segments_intersect
from .models import Connection, Location

MAX_DEGREE = 5
MIN_DEGREE = 1


def pair_key(a: str, b: str) -> Tuple[str, str]:
    return (a, b) if a <= b else (b, a)


class UnionFind:
    """Disjoint sets over location IDs with path halving."""

    def __init__(self, items: Iterable[str]):
        self.parent: Dict[str, str] = {item: item for item in items}
        self.size: Dict[str, int] = {item: 1 for item in self.parent}

    def find(self, item: str) -> str:
        parent = self.parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: str, b: str) -> bool:
        """Merge the sets holding ``a`` and ``b``. Returns False if already merged."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self.size[root_a] < self.size[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]
        return True

    def connected(self, a: str, b: str) -> bool:
        return self.find(a) == self.find(b)

    def component_count(self) -> int:
        return len({self.find(item) for item in self.parent})


class WorkingGraph:
    """Mutable edge set over a fixed list of locations."""

    def __init__(
        self,
        nodes: Sequence[Location],
        rng: np.random.Generator,
        connections: Optional[Iterable[Connection]] = None,
    ):
        self.nodes: Dict[str, Location] = {loc.id: loc for loc in nodes}
        self.positions: Dict[str, Tuple[float, float]] = {
            loc.id: (loc.x, loc.y) for loc in nodes
        }
        self.rng = rng
        self.connections: List[Connection] = []
        self.degree: Dict[str, int] = {loc_id: 0 for loc_id in self.nodes}
        self.pair_counts: Dict[Tuple[str, str], int] = {}
        self.components = UnionFind(self.nodes)

        for conn in connections or ():
            self._record(conn)

    def __len__(self) -> int:
        return len(self.connections)

    @property
    def average_degree(self) -> float:
        if not self.nodes:
            return 0.0
        return 2.0 * len(self.connections) / len(self.nodes)

    def _record(self, conn: Connection) -> None:
        self.connections.append(conn)
        self.degree[conn.source_id] += 1
        self.degree[conn.target_id] += 1
        key = conn.key
        self.pair_counts[key] = self.pair_counts.get(key, 0) + 1
        self.components.union(conn.source_id, conn.target_id)

    def has_pair(self, a: str, b: str) -> bool:
        return self.pair_counts.get(pair_key(a, b), 0) > 0

    def neighbours(self, location_id: str) -> List[str]:
        result = []
        for conn in self.connections:
            if conn.source_id == location_id:
                result.append(conn.target_id)
            elif conn.target_id == location_id:
                result.append(conn.source_id)
        return result

    def has_outer_neighbour(self, location_id: str) -> bool:
        return any(not self.nodes[other].is_core for other in self.neighbours(location_id))

    def passes_through_location(self, a: str, b: str) -> bool:
        """Check whether segment a-b runs over a third location."""
        pa, pb = self.positions[a], self.positions[b]
        for loc_id, position in self.positions.items():
            if loc_id in (a, b) or same_point(position, pa) or same_point(position, pb):
                continue
            if on_segment(pa, pb, position):
                return True
        return False

    def crosses(self, a: str, b: str) -> bool:
        """Check whether segment a-b would cross any current connection."""
        pa, pb = self.positions[a], self.positions[b]
        key = pair_key(a, b)
        for conn in self.connections:
            if conn.key == key:
                continue
            if segments_intersect(
                pa, pb, self.positions[conn.source_id], self.positions[conn.target_id]
            ):
                return True
        return False

    def rejection_reason(
        self, a: str, b: str, allow_multiple_edges: bool, allow_cycles: bool
    ) -> Optional[str]:
        """Return why edge a-b may not be added, or None if it is legal."""
        if a == b:
            return "self-loop"
        if self.degree[a] >= MAX_DEGREE or self.degree[b] >= MAX_DEGREE:
            return "degree cap"
        if not allow_multiple_edges and self.has_pair(a, b):
            return "duplicate pair"
        if not allow_cycles and self.components.connected(a, b):
            return "cycle"
        # Geometry last, it is the expensive check
        if self.crosses(a, b):
            return "crossing"
        if self.passes_through_location(a, b):
            return "location in the way"
        return None

    def blocked(self, a: str, b: str) -> bool:
        """Geometric part of ``rejection_reason`` alone."""
        return self.crosses(a, b) or self.passes_through_location(a, b)

    def can_connect(self, a: str, b: str, allow_multiple_edges: bool, allow_cycles: bool) -> bool:
        return self.rejection_reason(a, b, allow_multiple_edges, allow_cycles) is None

    def connect(self, a: str, b: str) -> Connection:
        """Add a generated, undirected, unit-weight connection from ``a`` to ``b``."""
        conn = Connection(id=new_id(self.rng), source_id=a, target_id=b)
        self._record(conn)
        return conn
