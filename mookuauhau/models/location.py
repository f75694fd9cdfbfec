"""
Location model and its address/type vocabulary.
"""

from enum import Enum

from pydantic import Field, field_validator

from mookuauhau.models.auxiliary import Note
from mookuauhau.models.base import Record


class LocationType(str, Enum):
    """Kinds of places, from Hawaiian land divisions up to countries."""

    MOKUPUNI = "MOKUPUNI"  # island
    MOKU = "MOKU"  # district
    AHUPUAA = "AHUPUAA"  # land division within a moku
    ILI = "ILI"  # subdivision of an ahupuaa
    CITY = "CITY"
    STATE = "STATE"
    COUNTRY = "COUNTRY"


class Address(Record):
    """Postal address of a location."""

    id: int | None = None
    value: str | None = None
    street: str | None = None
    city: str | None = None
    country: str | None = None
    state: str | None = None
    postal_code: str | None = None

    @field_validator("postal_code", mode="before")
    @classmethod
    def coerce_postal_code(cls, value):
        # Numeric postal codes are kept as text so leading zeros survive
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Location(Record):
    """
    A place referenced by life events.

    Locations are loaded once and never modified while queries are served.
    Coordinates are free-form strings and are not interpreted.
    """

    model_config = {"frozen": True}

    id: int = Field(..., description="Unique location ID")
    name: str = Field(..., min_length=1, description="Place name")
    lat: str | None = Field(default=None, description="Latitude, free-form")
    long: str | None = Field(default=None, description="Longitude, free-form")
    address: Address | None = None
    location_type: LocationType | None = None
    description: str | None = None
    notes: list[Note] = Field(default_factory=list)

    @field_validator("lat", "long", mode="before")
    @classmethod
    def coerce_coordinate(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("location_type", mode="before")
    @classmethod
    def normalize_location_type(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value
