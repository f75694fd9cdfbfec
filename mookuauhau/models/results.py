"""
Result records assembled by the query engine.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from mookuauhau.models.base import Record
from mookuauhau.models.location import Location
from mookuauhau.models.person import Person


class PersonSearchResult(Record):
    """A page of people matching a search."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    results: list[Person] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Matches before paging")
    count: int = Field(default=0, ge=0, description="Matches in this page")
    offset: int = Field(default=0, ge=0)


class PlaceSearchResult(Record):
    """A page of places matching a search."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    results: list[Location] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Matches before paging")
    count: int = Field(default=0, ge=0, description="Matches in this page")
    offset: int = Field(default=0, ge=0)


class PathStep(Record):
    """One person on a relationship path."""

    person: Person
    relation_to_next: Literal["parent", "child"] | None = Field(
        default=None,
        description="How the next person on the path relates to this one",
    )


class RelationshipPath(Record):
    """Shortest parent/child path between two people."""

    steps: list[PathStep] = Field(default_factory=list)
    generations_apart: int = Field(default=0, ge=0, description="Hop count")

    @property
    def people(self) -> list[Person]:
        return [step.person for step in self.steps]


class Dataset(Record):
    """Everything loaded at startup."""

    people: list[Person] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
