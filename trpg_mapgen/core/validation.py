"""
Parameter validation and graph invariant checks.

``check_invariants`` is run on every generator result before it is handed
back; anything it reports turns the result into a failure.
"""

import math
from itertools import combinations
from typing import List, Optional

from ..config import settings
from .errors import GenerationInfeasible, InvalidParameters
from .geometry import segments_intersect
from .graph import MAX_DEGREE, MIN_DEGREE, UnionFind
from .models import GenerationParameters, MapState

MIN_NODES = 2


def validate_parameters(
    params: GenerationParameters, node_count: int, max_outer_node_count: Optional[int] = None
) -> None:
    """
    Reject parameter sets the engine cannot work with.

    Args:
        params: Requested generation parameters
        node_count: Number of locations the connections will be built over
        max_outer_node_count: Upper bound on ``outer_node_count``; defaults to settings

    Raises:
        InvalidParameters: For out-of-range values or too few locations
        GenerationInfeasible: For an acyclic request whose average degree no tree can reach
    """
    limit = settings.max_outer_node_count if max_outer_node_count is None else max_outer_node_count

    if params.outer_node_count < 0:
        raise InvalidParameters(
            f"Outer node count must not be negative (got {params.outer_node_count})"
        )
    if params.outer_node_count > limit:
        raise InvalidParameters(
            f"Outer node count {params.outer_node_count} exceeds the limit of {limit}"
        )
    if not math.isfinite(params.avg_degree) or not 0 <= params.avg_degree <= MAX_DEGREE:
        raise InvalidParameters(
            f"Average degree must be between 0 and {MAX_DEGREE} (got {params.avg_degree})"
        )
    if node_count < MIN_NODES:
        raise InvalidParameters(
            f"At least {MIN_NODES} locations are needed to generate connections (got {node_count})"
        )

    if not params.allow_cycles:
        tree_average = 2.0 * (node_count - 1) / node_count
        if params.avg_degree > tree_average + 1e-9:
            raise GenerationInfeasible(
                f"Average degree {params.avg_degree:g} is unreachable without cycles: "
                f"a tree over {node_count} locations averages {tree_average:.2f}"
            )


def check_invariants(state: MapState, params: GenerationParameters) -> List[str]:
    """
    List every way ``state`` breaks the generated-graph invariants.

    Returns:
        Human-readable violations; empty when the graph is valid
    """
    violations: List[str] = []
    locations = {loc.id: loc for loc in state.locations}
    degree = {loc_id: 0 for loc_id in locations}
    outer_links = {loc_id: 0 for loc_id in locations}
    components = UnionFind(locations)
    seen_pairs = set()

    for conn in state.connections:
        if conn.source_id not in locations or conn.target_id not in locations:
            violations.append(f"Connection {conn.id} references a missing location")
            continue
        degree[conn.source_id] += 1
        degree[conn.target_id] += 1
        if not locations[conn.target_id].is_core:
            outer_links[conn.source_id] += 1
        if not locations[conn.source_id].is_core:
            outer_links[conn.target_id] += 1
        components.union(conn.source_id, conn.target_id)

        if conn.key in seen_pairs and not params.allow_multiple_edges:
            violations.append(
                f"Duplicate connection between {conn.source_id} and {conn.target_id}"
            )
        seen_pairs.add(conn.key)

    for loc_id, loc in locations.items():
        if not MIN_DEGREE <= degree[loc_id] <= MAX_DEGREE:
            violations.append(
                f"Location '{loc.name}' has {degree[loc_id]} connections "
                f"(allowed {MIN_DEGREE} to {MAX_DEGREE})"
            )
        if loc.is_core and outer_links[loc_id] == 0:
            violations.append(f"Core location '{loc.name}' has no connection to an outer location")

    if locations and components.component_count() > 1:
        violations.append(
            f"Graph is split into {components.component_count()} disconnected parts"
        )

    valid = [
        conn
        for conn in state.connections
        if conn.source_id in locations and conn.target_id in locations
    ]
    for first, second in combinations(valid, 2):
        if first.key == second.key:
            continue
        if segments_intersect(
            locations[first.source_id].position,
            locations[first.target_id].position,
            locations[second.source_id].position,
            locations[second.target_id].position,
        ):
            violations.append(f"Connections {first.id} and {second.id} cross")

    if not params.allow_cycles and locations and len(state.connections) != len(locations) - 1:
        violations.append(
            f"Connections contain a cycle ({len(state.connections)} connections "
            f"over {len(locations)} locations)"
        )

    return violations
