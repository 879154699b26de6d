"""Tests for the spanning skeleton builder."""

import math
from itertools import combinations

from trpg_mapgen.core.geometry import segments_intersect
from trpg_mapgen.core.graph import UnionFind
from trpg_mapgen.core.models import LocationKind
from trpg_mapgen.core.placement import place
from trpg_mapgen.core.skeleton import build_skeleton

from .conftest import make_location


def _degrees(nodes, connections):
    degree = {loc.id: 0 for loc in nodes}
    for conn in connections:
        degree[conn.source_id] += 1
        degree[conn.target_id] += 1
    return degree


class TestSkeleton:
    """Test skeleton shape and constraints."""

    def test_spanning_tree(self, core_locations, bounds, rng):
        nodes = place(core_locations, 16, bounds, 60.0, rng)
        skeleton = build_skeleton(nodes, True, rng)

        assert len(skeleton) == len(nodes) - 1
        components = UnionFind(loc.id for loc in nodes)
        for conn in skeleton:
            assert components.union(conn.source_id, conn.target_id)
        assert components.component_count() == 1

    def test_crossing_free(self, core_locations, bounds, rng):
        nodes = place(core_locations, 25, bounds, 40.0, rng)
        skeleton = build_skeleton(nodes, True, rng)
        positions = {loc.id: loc.position for loc in nodes}

        for first, second in combinations(skeleton, 2):
            assert not segments_intersect(
                positions[first.source_id],
                positions[first.target_id],
                positions[second.source_id],
                positions[second.target_id],
            )

    def test_single_node(self, rng):
        assert build_skeleton([make_location("a", 0, 0)], True, rng) == []

    def test_tie_prefers_lower_identity(self, rng):
        nodes = [
            make_location("c", -10, 0),
            make_location("a", 0, 0),
            make_location("b", 10, 0),
        ]
        skeleton = build_skeleton(nodes, True, rng)
        assert skeleton[0].key == ("a", "b")
        assert skeleton[1].key == ("a", "c")

    def test_degree_cap_on_hub(self, rng):
        hub = make_location("a", 0, 0)
        leaves = [
            make_location(
                f"leaf-{k}",
                10 * math.cos(k * math.pi / 3),
                10 * math.sin(k * math.pi / 3),
            )
            for k in range(6)
        ]
        nodes = [hub] + leaves
        skeleton = build_skeleton(nodes, True, rng)

        degree = _degrees(nodes, skeleton)
        assert len(skeleton) == 6
        assert degree["a"] <= 5
        assert max(degree.values()) <= 5

    def test_acyclic_mode_avoids_core_pairs(self, rng):
        nodes = [
            make_location("core-a", 0, 0, LocationKind.CORE),
            make_location("core-b", 10, 0, LocationKind.CORE),
            make_location("outer-a", 5, 100),
        ]
        skeleton = build_skeleton(nodes, False, rng)
        keys = {conn.key for conn in skeleton}
        assert ("core-a", "core-b") not in keys
        assert keys == {("core-a", "outer-a"), ("core-b", "outer-a")}

    def test_connection_defaults(self, core_locations, bounds, rng):
        nodes = place(core_locations, 4, bounds, 60.0, rng)
        for conn in build_skeleton(nodes, True, rng):
            assert conn.weight == 1.0
            assert conn.directed is False
