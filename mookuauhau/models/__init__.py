"""
Data models for Mookuauhau.

Core models:
- Person, Name, LifeEvent: people and what happened to them
- Sex, NameType: person vocabularies
- Location, Address, LocationType: places
- Note, Citation, Agent, Group, School, Media: passive attached records
- PersonSearchResult, PlaceSearchResult: paged search results
- RelationshipPath, PathStep: resolved shortest paths
- Dataset: the records loaded at startup
"""

from mookuauhau.models.auxiliary import Agent, Citation, Group, Media, Note, School
from mookuauhau.models.location import Address, Location, LocationType
from mookuauhau.models.person import LifeEvent, Name, NameType, Person, Sex
from mookuauhau.models.results import (
    Dataset,
    PathStep,
    PersonSearchResult,
    PlaceSearchResult,
    RelationshipPath,
)

__all__ = [
    # People
    "Person",
    "Name",
    "NameType",
    "Sex",
    "LifeEvent",
    # Places
    "Location",
    "Address",
    "LocationType",
    # Auxiliary records
    "Note",
    "Citation",
    "Agent",
    "Group",
    "School",
    "Media",
    # Results
    "PersonSearchResult",
    "PlaceSearchResult",
    "PathStep",
    "RelationshipPath",
    "Dataset",
]
