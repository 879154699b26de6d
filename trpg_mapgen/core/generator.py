"""
Map generation orchestrator.

Three modes, each built from placement, skeleton and augmentation:

1. generate_map() - keep core locations, replace every outer location
2. regenerate_outer() - keep core and manually created outer locations,
   replace engine-generated outer locations
3. generate_connections() - keep every location, replace the connections

Every mode starts from a copy of the input and either returns a complete
``MapState`` that passes ``check_invariants`` or raises. No partial graph
is ever returned.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import structlog

from ..config import settings
from ..utils.random import Seed, ensure_rng
from .augment import augment
from .errors import GenerationInfeasible
from .models import Bounds, GenerationParameters, Location, MapState
from .placement import place
from .skeleton import build_skeleton
from .validation import check_invariants, validate_parameters

logger = structlog.get_logger()


def _default_bounds() -> Bounds:
    return Bounds(width=settings.map_width, height=settings.map_height)


@dataclass
class GeneratorOptions:
    """Placement and limit settings for a MapGenerator."""
    bounds: Bounds = field(default_factory=_default_bounds)
    min_spacing: float = field(default_factory=lambda: settings.min_spacing)
    placement_attempts: int = field(default_factory=lambda: settings.placement_attempts)
    max_outer_node_count: int = field(default_factory=lambda: settings.max_outer_node_count)


class MapGenerator:
    """Runs generation requests against snapshots of the current locations."""

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Seed = None,
        options: Optional[GeneratorOptions] = None,
    ) -> None:
        """
        Args:
            rng: Random source to draw from; takes precedence over ``seed``
            seed: Seed for a fresh random source when ``rng`` is not given
            options: Placement bounds, spacing and limits
        """
        self.rng = ensure_rng(rng, seed)
        self.options = options or GeneratorOptions()

    def generate_map(
        self, locations: Sequence[Location], params: GenerationParameters
    ) -> MapState:
        """Full regeneration: keep core locations, place a fresh outer set, reconnect."""
        kept = [loc.model_copy() for loc in locations if loc.is_core]
        logger.info(f"Generating map: {len(kept)} core locations kept")
        return self._place_and_connect(kept, params)

    def regenerate_outer(
        self, locations: Sequence[Location], params: GenerationParameters
    ) -> MapState:
        """Replace engine-generated outer locations, keep every manual location."""
        kept = [
            loc.model_copy() for loc in locations if loc.is_core or not loc.auto_generated
        ]
        logger.info(
            f"Regenerating outer locations: {len(kept)} kept, "
            f"{len(locations) - len(kept)} discarded"
        )
        return self._place_and_connect(kept, params)

    def generate_connections(
        self, locations: Sequence[Location], params: GenerationParameters
    ) -> MapState:
        """Keep every location in place and rebuild all connections."""
        nodes = [loc.model_copy() for loc in locations]
        logger.info(f"Generating connections over {len(nodes)} locations")
        # No placement in this mode, so the outer count is not checked
        validate_parameters(
            params.model_copy(update={"outer_node_count": 0}),
            len(nodes),
            self.options.max_outer_node_count,
        )
        return self._connect(nodes, params)

    def _place_and_connect(
        self, kept: List[Location], params: GenerationParameters
    ) -> MapState:
        validate_parameters(
            params,
            len(kept) + max(params.outer_node_count, 0),
            self.options.max_outer_node_count,
        )
        nodes = place(
            kept,
            params.outer_node_count,
            self.options.bounds,
            self.options.min_spacing,
            self.rng,
            max_attempts=self.options.placement_attempts,
        )
        return self._connect(nodes, params)

    def _connect(self, nodes: List[Location], params: GenerationParameters) -> MapState:
        try:
            skeleton = build_skeleton(nodes, params.allow_cycles, self.rng)
            connections = augment(nodes, skeleton, params, self.rng)
        except GenerationInfeasible as e:
            logger.warning(f"Generation failed: {e.message}")
            raise

        state = MapState(locations=nodes, connections=connections)
        violations = check_invariants(state, params)
        if violations:
            logger.error(f"Generated graph rejected: {'; '.join(violations)}")
            raise GenerationInfeasible(
                "Generated graph violates constraints: " + "; ".join(violations)
            )

        logger.info(
            f"Generated {len(state.locations)} locations and {len(state.connections)} connections"
        )
        return state


def generate_map(
    locations: Sequence[Location], params: GenerationParameters, seed: Seed = None
) -> MapState:
    """Full regeneration with a one-off generator."""
    return MapGenerator(seed=seed).generate_map(locations, params)


def regenerate_outer(
    locations: Sequence[Location], params: GenerationParameters, seed: Seed = None
) -> MapState:
    """Outer-only regeneration with a one-off generator."""
    return MapGenerator(seed=seed).regenerate_outer(locations, params)


def generate_connections(
    locations: Sequence[Location], params: GenerationParameters, seed: Seed = None
) -> MapState:
    """Connections-only regeneration with a one-off generator."""
    return MapGenerator(seed=seed).generate_connections(locations, params)
