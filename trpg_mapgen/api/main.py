"""FastAPI main application."""

import logging
from typing import Callable, List, Optional, Sequence, Union

import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.errors import GenerationInfeasible, InvalidParameters
from ..core.generator import MapGenerator
from ..core.models import Connection, GenerationParameters, Location, MapState
from ..core.validation import check_invariants

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="TRPG Map Generation API",
    description="Generates crossing-free location graphs for tabletop-RPG world maps",
    version=__version__,
)


# Request/Response models
class GenerationRequest(BaseModel):
    """Request to regenerate part of a map."""

    locations: List[Location] = Field(default_factory=list, description="Current locations")
    parameters: GenerationParameters = Field(
        default_factory=GenerationParameters, description="Generation parameters"
    )
    seed: Optional[Union[int, str]] = Field(None, description="Random seed for reproducible generation")


class ValidationRequest(BaseModel):
    """Request to check a graph against the generated-graph constraints."""

    locations: List[Location] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)
    parameters: GenerationParameters = Field(default_factory=GenerationParameters)


class ValidationResponse(BaseModel):
    """Result of a graph check."""

    valid: bool
    violations: List[str]


GenerationMode = Callable[[Sequence[Location], GenerationParameters], MapState]


def _run(mode: GenerationMode, request: GenerationRequest) -> MapState:
    logger.info(
        "Generation requested",
        mode=mode.__name__,
        locations=len(request.locations),
        parameters=request.parameters.model_dump(),
    )
    try:
        return mode(request.locations, request.parameters)
    except InvalidParameters as e:
        logger.info("Generation rejected", mode=mode.__name__, error=e.message)
        raise HTTPException(status_code=400, detail=e.message)
    except GenerationInfeasible as e:
        logger.info("Generation infeasible", mode=mode.__name__, error=e.message)
        raise HTTPException(status_code=422, detail=e.message)


# API endpoints
@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "TRPG Map Generation API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/generate/map", response_model=MapState)
def generate_map(request: GenerationRequest):
    """Keep core locations, place a new outer set and connect everything."""
    return _run(MapGenerator(seed=request.seed).generate_map, request)


@app.post("/generate/outer", response_model=MapState)
def regenerate_outer(request: GenerationRequest):
    """Replace engine-generated outer locations; manual locations are preserved."""
    return _run(MapGenerator(seed=request.seed).regenerate_outer, request)


@app.post("/generate/connections", response_model=MapState)
def generate_connections(request: GenerationRequest):
    """Rebuild connections over the given locations without moving any of them."""
    return _run(MapGenerator(seed=request.seed).generate_connections, request)


@app.post("/validate", response_model=ValidationResponse)
def validate_graph(request: ValidationRequest):
    """Report how a graph breaks the generated-graph constraints, if at all."""
    state = MapState(locations=request.locations, connections=request.connections)
    violations = check_invariants(state, request.parameters)
    return ValidationResponse(valid=not violations, violations=violations)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
