"""
Degree augmentation.

Adds random crossing-free connections on top of the skeleton until the
target average degree is reached, then makes sure every core location
touches at least one outer location.
"""

from itertools import combinations
from typing import List, Sequence

import numpy as np
import structlog

from .errors import GenerationInfeasible
from .geometry import distance
from .graph import WorkingGraph
from .models import Connection, GenerationParameters, Location

logger = structlog.get_logger()


def _fill_to_average(graph: WorkingGraph, params: GenerationParameters) -> int:
    """Add random legal pairs until the average degree target is met.

    A pair rejected once stays illegal for the rest of the call (degrees
    and components only grow, crossings never go away), so one pass over a
    shuffled pair list is enough. With multiple edges allowed an accepted
    pair can be accepted again, hence the extra passes.
    """
    pairs = list(combinations(sorted(graph.nodes), 2))
    added = 0
    while graph.average_degree < params.avg_degree:
        added_this_pass = 0
        for index in graph.rng.permutation(len(pairs)):
            if graph.average_degree >= params.avg_degree:
                break
            a, b = pairs[index]
            if graph.can_connect(a, b, params.allow_multiple_edges, params.allow_cycles):
                graph.connect(a, b)
                added_this_pass += 1
        added += added_this_pass
        if not params.allow_multiple_edges or added_this_pass == 0:
            break
    return added


def _ensure_core_reaches_outer(graph: WorkingGraph, params: GenerationParameters) -> int:
    """Give every core location an outer neighbour, nearest first."""
    outer_ids = sorted(loc_id for loc_id, loc in graph.nodes.items() if not loc.is_core)
    added = 0

    for core_id in sorted(loc_id for loc_id, loc in graph.nodes.items() if loc.is_core):
        if graph.has_outer_neighbour(core_id):
            continue
        core = graph.nodes[core_id]
        candidates = sorted(
            outer_ids,
            key=lambda outer_id: (
                round(distance(graph.positions[core_id], graph.positions[outer_id]), 9),
                outer_id,
            ),
        )
        reasons = set()
        for outer_id in candidates:
            reason = graph.rejection_reason(
                core_id, outer_id, params.allow_multiple_edges, params.allow_cycles
            )
            if reason is None:
                graph.connect(core_id, outer_id)
                added += 1
                break
            reasons.add(reason)
        else:
            if not outer_ids:
                detail = "there are no outer locations"
            else:
                detail = "every candidate is blocked by " + ", ".join(sorted(reasons))
            raise GenerationInfeasible(
                f"Core location '{core.name}' cannot be connected to an outer location: {detail}"
            )
    return added


def augment(
    nodes: Sequence[Location],
    skeleton: Sequence[Connection],
    params: GenerationParameters,
    rng: np.random.Generator,
) -> List[Connection]:
    """
    Grow the skeleton towards the requested average degree.

    Args:
        nodes: All locations of the map
        skeleton: Spanning connections from ``build_skeleton``
        params: Generation parameters (average degree, edge policies)
        rng: Random source for pair order and connection identities

    Returns:
        Skeleton connections followed by the added ones

    Raises:
        GenerationInfeasible: If a core location cannot reach any outer location
    """
    graph = WorkingGraph(nodes, rng, skeleton)

    added = _fill_to_average(graph, params)
    if graph.average_degree < params.avg_degree:
        logger.warning(
            f"Average degree {graph.average_degree:.2f} below target {params.avg_degree:.2f}: "
            "no further legal connection"
        )

    forced = _ensure_core_reaches_outer(graph, params)
    logger.info(
        f"Augmented skeleton with {added} random and {forced} core connections, "
        f"average degree {graph.average_degree:.2f}"
    )
    return list(graph.connections)
