"""
Person model with names and life events.

Relationships to other people and places are stored as integer ids (weak
references). The entity store resolves them on demand.
"""

from datetime import date
from enum import Enum

from pydantic import AliasChoices, Field, field_validator

from mookuauhau.models.auxiliary import Citation, Group, Note, School
from mookuauhau.models.base import Record


class Sex(str, Enum):
    """Recorded sex of a person."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


SEX_ABBREVIATIONS = {"M": Sex.MALE, "F": Sex.FEMALE, "O": Sex.OTHER, "U": Sex.UNKNOWN}


class NameType(str, Enum):
    """Circumstances under which a name was given."""

    BIRTH = "BIRTH"
    MARRIED = "MARRIED"
    AKA = "AKA"
    NICKNAME = "NICKNAME"
    ADOPTIVE = "ADOPTIVE"
    FORMAL = "FORMAL"
    RELIGIOUS = "RELIGIOUS"


class Name(Record):
    """A single name of a person."""

    id: int | None = None
    name_type: NameType | None = None
    first: str | None = None
    middle: list[str] = Field(default_factory=list)
    last: str | None = None
    given_by: list[int] = Field(default_factory=list, description="Person ids")
    named_from: list[int] = Field(default_factory=list, description="Person ids")
    notes: list[Note] = Field(default_factory=list)

    @field_validator("middle", mode="before")
    @classmethod
    def split_middle(cls, value):
        if isinstance(value, str):
            return value.split()
        return value

    @classmethod
    def from_text(cls, text: str) -> "Name":
        """
        Build a name from free text.

        "Jason Momoa" gives first="Jason", last="Momoa"; any words in between
        become middle names. A single word is a first name.
        """
        parts = text.split()
        if not parts:
            return cls()
        if len(parts) == 1:
            return cls(first=parts[0])
        return cls(first=parts[0], middle=parts[1:-1], last=parts[-1])

    @property
    def full_name(self) -> str:
        return " ".join(self.text_fields())

    def text_fields(self) -> list[str]:
        """Fields that are searchable for this name."""
        return [p for p in [self.first, *self.middle, self.last] if p]


class LifeEvent(Record):
    """
    Birth, death, marriage, census, moving and similar events.

    The date is kept exactly as recorded; it is not parsed into a calendar
    type. ``place`` is a location id.
    """

    id: int | None = None
    description: str | None = None
    date: str | None = None
    place: int | None = None
    cause: str | None = None
    notes: list[Note] = Field(default_factory=list)
    citations: list[Citation] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def keep_date_as_text(cls, value):
        # YAML turns unquoted 1982-01-01 into a date object
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Person(Record):
    """
    Core record for a given person.

    Features:
    - Multiple names (birth, married, nicknames...)
    - Optional birth/death events plus an ordered list of other events
    - Parent/child links as sorted, de-duplicated person ids
    - Auxiliary attached data (groups, schools, notes, links)
    """

    model_config = {"frozen": True}

    id: int = Field(..., description="Unique, immutable person ID")
    names: list[Name] = Field(
        default_factory=list,
        validation_alias=AliasChoices("names", "name"),
        description="All recorded names",
    )
    sex: Sex = Field(default=Sex.UNKNOWN, description="Recorded sex")
    birth: LifeEvent | None = None
    death: LifeEvent | None = None
    events: list[LifeEvent] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)
    schools: list[School] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    parents: list[int] = Field(default_factory=list, description="Parent person ids")
    children: list[int] = Field(default_factory=list, description="Child person ids")
    links: list[str] = Field(default_factory=list)

    @field_validator("names", mode="before")
    @classmethod
    def parse_names(cls, value):
        if value is None:
            return []
        if isinstance(value, (str, dict, Name)):
            value = [value]
        return [Name.from_text(v) if isinstance(v, str) else v for v in value]

    @field_validator("sex", mode="before")
    @classmethod
    def parse_sex(cls, value):
        if value is None:
            return Sex.UNKNOWN
        if isinstance(value, str):
            value = value.strip().upper()
            return SEX_ABBREVIATIONS.get(value, value)
        return value

    @field_validator("parents", "children")
    @classmethod
    def sort_unique(cls, value: list[int]) -> list[int]:
        return sorted(set(value))

    @property
    def display_name(self) -> str:
        """First recorded name, or empty string."""
        for name in self.names:
            if name.full_name:
                return name.full_name
        return ""

    def all_events(self) -> list[LifeEvent]:
        """Birth, death and other events, in that order."""
        events = [e for e in (self.birth, self.death) if e is not None]
        return events + list(self.events)
