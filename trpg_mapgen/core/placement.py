"""
Node placement.

Core locations keep their coordinates; outer locations are scattered
uniformly over the map bounds with a best-effort minimum spacing.
"""

from typing import List, Sequence

import numpy as np
import structlog

from ..utils.random import new_id
from .models import Bounds, Location, LocationKind

logger = structlog.get_logger()

DEFAULT_MAX_ATTEMPTS = 50


def _nearest_distance(placed: np.ndarray, x: float, y: float) -> float:
    if len(placed) == 0:
        return float("inf")
    return float(np.min(np.hypot(placed[:, 0] - x, placed[:, 1] - y)))


def place(
    existing: Sequence[Location],
    outer_count: int,
    bounds: Bounds,
    min_spacing: float,
    rng: np.random.Generator,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[Location]:
    """
    Place ``outer_count`` new outer locations around the existing ones.

    Args:
        existing: Locations that must stay where they are (core and any
            preserved outer locations)
        outer_count: Number of outer locations to create
        bounds: Rectangle new locations are sampled in
        min_spacing: Preferred minimum distance to every placed location
        rng: Random source; also used for the new identities
        max_attempts: Samples tried per location before a crowded point is accepted

    Returns:
        Copies of the existing locations followed by the new outer locations
    """
    result = [loc.model_copy() for loc in existing]
    placed = np.array([[loc.x, loc.y] for loc in existing], dtype=float).reshape(-1, 2)

    core_count = sum(1 for loc in existing if loc.is_core)
    if core_count != 4:
        logger.info(f"Placing around {core_count} core locations (4 recommended)")

    numbering_start = sum(1 for loc in existing if not loc.is_core) + 1
    crowded = 0

    for index in range(outer_count):
        x = y = 0.0
        for _ in range(max_attempts):
            x = float(rng.uniform(bounds.min_x, bounds.max_x))
            y = float(rng.uniform(bounds.min_y, bounds.max_y))
            if _nearest_distance(placed, x, y) >= min_spacing:
                break
        else:
            # Keep the last sample rather than fail
            crowded += 1

        location = Location(
            id=new_id(rng),
            name=f"Outer {numbering_start + index}",
            kind=LocationKind.OUTER,
            x=x,
            y=y,
            auto_generated=True,
        )
        result.append(location)
        placed = np.vstack([placed, [x, y]])

    if crowded:
        logger.warning(
            f"{crowded} of {outer_count} outer locations placed closer than {min_spacing:.1f}"
        )
    logger.info(f"Placed {outer_count} outer locations next to {len(existing)} existing")
    return result
