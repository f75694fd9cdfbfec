"""
Mookuauhau FastAPI Application

A REST API server for the genealogy query engine.
Provides endpoints for fetching people and places, paging through people,
finding how two people are related, and searching by name or description.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from mookuauhau import __version__
from mookuauhau.config import load_config
from mookuauhau.models import (
    Location,
    Person,
    PersonSearchResult,
    PlaceSearchResult,
    RelationshipPath,
)
from mookuauhau.services.query_engine import QueryEngine
from mookuauhau.utils.exceptions import NotFoundError, ValidationError
from mookuauhau.utils.logger import configure_logging, get_logger

# Global engine instance
engine: QueryEngine | None = None
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    engine_initialized: bool
    dataset: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global engine

    # Environment, optional YAML file, then defaults
    config = load_config()
    configure_logging(config.logging)

    logger.info("Starting Mookuauhau server")
    logger.info(f"Configuration: dataset={config.dataset.path}")

    # Dataset errors abort startup
    engine = QueryEngine.from_config(config)
    app.state.config = config
    logger.info("Mookuauhau engine initialized")

    yield

    logger.info("Shutting down Mookuauhau server")
    engine = None


# Create FastAPI app
app = FastAPI(
    title="Mookuauhau API",
    description="Genealogy queries: people, places, relationship paths and search",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _require_engine() -> QueryEngine:
    if not engine:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return engine


def _bad_request(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=e.to_dict())


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=e.to_dict())


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    config = getattr(app.state, "config", None)
    return HealthResponse(
        status="healthy" if engine else "initializing",
        engine_initialized=engine is not None,
        dataset=config.dataset.path if config else "",
    )


# People endpoints
@app.get("/people", response_model=list[Person])
async def get_people(
    limit: int | None = Query(default=None, description="Max people; all remaining if omitted"),
    offset: int | None = Query(default=None, description="People to skip; 0 if omitted"),
):
    """
    Get a paginated list of people.

    People are returned in ascending id order. An offset past the end of the
    population returns an empty list.
    """
    query_engine = _require_engine()

    try:
        return query_engine.get_people(limit=limit, offset=offset)
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error listing people: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/people/{person_id}", response_model=Person)
async def get_person(person_id: int):
    """Get a person by person ID."""
    query_engine = _require_engine()

    try:
        return query_engine.require_person(person_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error getting person {person_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/people/{person1}/path/{person2}", response_model=list[Person])
async def get_shortest_path(person1: int, person2: int):
    """
    Get the shortest path between two people (how is this person related?).

    Returns the people on the path, both ends included. The list is empty
    when either person is unknown or the two are not related.
    """
    query_engine = _require_engine()

    try:
        return query_engine.get_shortest_path(person1, person2)
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error finding path {person1} -> {person2}: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/people/{person1}/relationship/{person2}", response_model=RelationshipPath)
async def get_relationship(person1: int, person2: int):
    """
    Get the shortest path with each step labelled parent or child.
    """
    query_engine = _require_engine()

    try:
        relationship = query_engine.get_relationship(person1, person2)
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error describing relationship {person1} -> {person2}: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    if relationship is None:
        raise HTTPException(status_code=404, detail="No relationship found")
    return relationship


# Place endpoints
@app.get("/places/{location_id}", response_model=Location)
async def get_place(location_id: int):
    """Get a place by location ID."""
    query_engine = _require_engine()

    try:
        return query_engine.require_place(location_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error getting place {location_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


# Search endpoints
@app.get("/search/people", response_model=PersonSearchResult)
async def search_people(
    text: str = Query(..., description="Search text"),
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
):
    """
    Full-text string search for a person.

    Every word of the text is matched against the start of name words.
    Results are ranked by how many words matched, then by person id.
    """
    query_engine = _require_engine()

    try:
        return query_engine.search_people_page(text, limit=limit, offset=offset)
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error searching people: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/search/places", response_model=PlaceSearchResult)
async def search_places(
    text: str = Query(..., description="Search text"),
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
):
    """
    Full-text string search for a place, over its name and description.
    """
    query_engine = _require_engine()

    try:
        return query_engine.search_places_page(text, limit=limit, offset=offset)
    except ValidationError as e:
        raise _bad_request(e) from e
    except Exception as e:
        logger.error(f"Error searching places: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


# Statistics endpoint
@app.get("/stats")
async def get_stats():
    """
    Get dataset statistics.

    Returns counts of people, locations, relationships and index tokens.
    """
    return _require_engine().get_statistics()


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Mookuauhau API",
        "version": __version__,
        "description": "Genealogy queries: people, places, relationship paths and search",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
