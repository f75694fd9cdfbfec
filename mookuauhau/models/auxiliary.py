"""
Auxiliary records attached to people and places.

These are passive data: the query core stores and returns them but never
indexes or validates them beyond their shape. Unknown keys are kept.
"""

from pydantic import Field

from mookuauhau.models.base import Record


class Note(Record):
    """Free-form note attached to an entity."""

    model_config = {"extra": "allow"}

    id: int | None = None
    text: str | None = None
    title: str | None = None
    timestamp: str | None = None
    author: str | None = None


class Agent(Record):
    """Person responsible for linking the given data."""

    model_config = {"extra": "allow"}

    id: int | None = None
    names: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    phone: int | str | None = None
    email: list[str] = Field(default_factory=list)


class Citation(Record):
    """Metadata about a citation source."""

    model_config = {"extra": "allow"}

    id: int | None = None
    title: str | None = None
    author: str | None = None
    page: str | None = None
    link: str | None = None
    date_accessed: str | None = None
    date_published: str | None = None
    notes: list[Note] = Field(default_factory=list)
    agents: list[Agent] = Field(default_factory=list)


class Group(Record):
    """An association people can be tied to (halau, clubs, sports)."""

    model_config = {"extra": "allow"}

    id: int | None = None
    names: list[str] = Field(default_factory=list)
    place: int | None = None
    description: str | None = None
    notes: list[Note] = Field(default_factory=list)
    citations: list[Citation] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)


class School(Record):
    """Metadata about a school."""

    model_config = {"extra": "allow"}

    id: int | None = None
    names: list[str] = Field(default_factory=list)
    location: int | None = None
    description: str | None = None
    notes: list[Note] = Field(default_factory=list)
    citations: list[Citation] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)


class Media(Record):
    """Reference to externally stored media."""

    model_config = {"extra": "allow"}

    id: int | None = None
    link: str | None = None
    description: str | None = None
    alt_text: str | None = None
