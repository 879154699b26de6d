"""
Core map generation functionality.
"""

from .errors import GenerationError, GenerationInfeasible, InvalidParameters
from .models import Bounds, Connection, GenerationParameters, Location, LocationKind, MapState
from .geometry import angle, distance, segments_intersect
from .placement import place
from .skeleton import build_skeleton
from .augment import augment
from .validation import check_invariants, validate_parameters
from .generator import (
    GeneratorOptions,
    MapGenerator,
    generate_connections,
    generate_map,
    regenerate_outer,
)

__all__ = ['GenerationError', 'GenerationInfeasible', 'InvalidParameters',
           'Bounds', 'Connection', 'GenerationParameters', 'Location', 'LocationKind', 'MapState',
           'angle', 'distance', 'segments_intersect',
           'place', 'build_skeleton', 'augment', 'check_invariants', 'validate_parameters',
           'GeneratorOptions', 'MapGenerator',
           'generate_map', 'regenerate_outer', 'generate_connections']
