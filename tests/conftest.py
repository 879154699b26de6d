"""Shared fixtures for the generation engine tests."""

import pytest

from trpg_mapgen.core.models import Bounds, GenerationParameters, Location, LocationKind
from trpg_mapgen.utils.random import make_rng


def make_location(loc_id, x, y, kind=LocationKind.OUTER, auto_generated=False, name=None):
    return Location(
        id=loc_id,
        name=name or loc_id,
        kind=kind,
        x=x,
        y=y,
        auto_generated=auto_generated,
    )


@pytest.fixture
def rng():
    return make_rng(1234)


@pytest.fixture
def bounds():
    return Bounds(width=1000, height=800)


@pytest.fixture
def core_locations():
    """Four pinned core locations spread over the default map area."""
    return [
        make_location("core-1", 200, 200, LocationKind.CORE),
        make_location("core-2", 800, 200, LocationKind.CORE),
        make_location("core-3", 200, 600, LocationKind.CORE),
        make_location("core-4", 800, 600, LocationKind.CORE),
    ]


@pytest.fixture
def default_params():
    return GenerationParameters(
        outer_node_count=16,
        avg_degree=3.0,
        allow_multiple_edges=False,
        allow_cycles=True,
    )
