"""
Connectivity builder.

Grows a crossing-free spanning tree over all locations, Prim style: the
outside location nearest to the tree is attached to its nearest tree
location, falling back to the next-nearest pair whenever the edge would
cross the tree built so far or overload a location.
"""

from typing import List, Sequence

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from .errors import GenerationInfeasible
from .graph import MAX_DEGREE, WorkingGraph
from .models import Connection, Location

logger = structlog.get_logger()

# Distances are rounded to this many decimals before ordering, so that
# near-equal candidates fall back to the identity tie-break.
TIE_DECIMALS = 9


def build_skeleton(
    nodes: Sequence[Location], allow_cycles: bool, rng: np.random.Generator
) -> List[Connection]:
    """
    Build the spanning skeleton that degree augmentation starts from.

    The skeleton is always a tree: ``len(nodes) - 1`` connections, connected,
    no crossings and no degree above the cap. When ``allow_cycles`` is False
    no edge can be added to it later without closing a cycle, so core-to-core
    attachments are only used when nothing else fits, which leaves each core
    location with an outer neighbour wherever the layout allows.

    Args:
        nodes: Every location that must end up connected
        allow_cycles: Whether the final graph may contain cycles
        rng: Random source for connection identities

    Returns:
        The skeleton connections

    Raises:
        GenerationInfeasible: If some location cannot be attached without a crossing
    """
    ordered = sorted(nodes, key=lambda loc: loc.id)
    graph = WorkingGraph(ordered, rng)
    if len(ordered) < 2:
        return []

    ids = [loc.id for loc in ordered]
    is_core = np.array([loc.is_core for loc in ordered], dtype=bool)
    coords = np.array([[loc.x, loc.y] for loc in ordered], dtype=float)
    dist = np.round(cdist(coords, coords), TIE_DECIMALS)

    in_tree = np.zeros(len(ordered), dtype=bool)
    in_tree[0] = True

    while not in_tree.all():
        outside = np.flatnonzero(~in_tree)
        attachable = np.array(
            [i for i in np.flatnonzero(in_tree) if graph.degree[ids[i]] < MAX_DEGREE], dtype=int
        )
        if len(attachable) == 0:
            raise GenerationInfeasible(
                "Every connected location already has the maximum of "
                f"{MAX_DEGREE} connections; {len(outside)} location(s) cannot be attached"
            )

        sub = dist[np.ix_(outside, attachable)]
        rows, cols = np.meshgrid(outside, attachable, indexing="ij")
        if allow_cycles:
            penalty = np.zeros(sub.shape, dtype=int)
        else:
            penalty = (is_core[rows] & is_core[cols]).astype(int)
        # lexsort: last key is primary
        order = np.lexsort((cols.ravel(), rows.ravel(), sub.ravel(), penalty.ravel()))

        for flat in order:
            u = int(rows.flat[flat])
            t = int(cols.flat[flat])
            if not graph.blocked(ids[u], ids[t]):
                graph.connect(ids[t], ids[u])
                in_tree[u] = True
                break
        else:
            stranded = ", ".join(ordered[i].name for i in outside)
            logger.warning(f"Skeleton stuck with {len(outside)} unattached locations")
            raise GenerationInfeasible(
                f"No crossing-free connection can attach location(s): {stranded}"
            )

    logger.info(f"Built skeleton with {len(graph)} connections over {len(ordered)} locations")
    return list(graph.connections)
