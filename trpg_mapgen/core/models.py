"""
Data structures shared by the generation engine.

Locations and connections mirror the records kept by the editor's store.
The engine only ever receives copies of them and hands back a new
``MapState``; persisting it is the caller's job.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class LocationKind(str, Enum):
    """Node category of a location."""

    CORE = "core"
    OUTER = "outer"


class Location(BaseModel):
    """A place on the world map."""

    id: str = Field(description="Unique location identifier")
    name: str = Field(description="Display name")
    kind: LocationKind = Field(description="Core locations are pinned, outer ones may be regenerated")
    x: float = Field(description="X coordinate")
    y: float = Field(description="Y coordinate")
    description: Optional[str] = Field(default=None, description="Free-text notes")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Arbitrary metadata")
    auto_generated: bool = Field(
        default=False, description="Whether the engine created this location"
    )

    @property
    def is_core(self) -> bool:
        return self.kind == LocationKind.CORE

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Connection(BaseModel):
    """A route between two locations."""

    id: str = Field(description="Unique connection identifier")
    source_id: str = Field(description="Location ID at one end")
    target_id: str = Field(description="Location ID at the other end")
    directed: bool = Field(default=False, description="Whether travel is one-way")
    weight: float = Field(default=1.0, description="Travel cost")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Arbitrary metadata")

    @model_validator(mode="after")
    def _check_endpoints(self) -> "Connection":
        if self.source_id == self.target_id:
            raise ValueError(f"Connection {self.id} links location {self.source_id} to itself")
        return self

    @property
    def key(self) -> Tuple[str, str]:
        """Unordered endpoint pair, smaller ID first."""
        if self.source_id <= self.target_id:
            return (self.source_id, self.target_id)
        return (self.target_id, self.source_id)

    def touches(self, location_id: str) -> bool:
        return location_id in (self.source_id, self.target_id)


class GenerationParameters(BaseModel):
    """Settings for one generation call.

    Range checks happen in the generator so that bad values surface as
    ``InvalidParameters`` rather than a validation error at construction.
    """

    outer_node_count: int = Field(default=10, description="Number of outer nodes to place")
    avg_degree: float = Field(default=3.0, description="Target average connections per location")
    allow_multiple_edges: bool = Field(
        default=False, description="Allow more than one connection per location pair"
    )
    allow_cycles: bool = Field(default=True, description="Allow the connections to form cycles")


class Bounds(BaseModel):
    """Axis-aligned rectangle that outer nodes are placed in."""

    x: float = 0.0
    y: float = 0.0
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


class MapState(BaseModel):
    """A snapshot of all locations and connections."""

    locations: List[Location] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)

    def location_ids(self) -> List[str]:
        return [loc.id for loc in self.locations]

    def get_location(self, location_id: str) -> Optional[Location]:
        for loc in self.locations:
            if loc.id == location_id:
                return loc
        return None

    def connections_for_location(self, location_id: str) -> List[Connection]:
        return [conn for conn in self.connections if conn.touches(location_id)]

    def degree(self, location_id: str) -> int:
        return len(self.connections_for_location(location_id))

    def connection_exists(self, first_id: str, second_id: str) -> bool:
        """Check for a connection between two locations in either direction."""
        key = (first_id, second_id) if first_id <= second_id else (second_id, first_id)
        return any(conn.key == key for conn in self.connections)

    def without_location(self, location_id: str) -> "MapState":
        """Return a copy with the location and every connection touching it removed."""
        return MapState(
            locations=[loc.model_copy() for loc in self.locations if loc.id != location_id],
            connections=[
                conn.model_copy() for conn in self.connections if not conn.touches(location_id)
            ],
        )

    def without_connections(self) -> "MapState":
        """Return a copy that keeps the locations and drops every connection."""
        return MapState(locations=[loc.model_copy() for loc in self.locations], connections=[])
