"""
Dataset loader: reads people and locations from JSON or YAML documents.

Accepted document shapes:

    people: [...]          # mapping with people and optional locations/places
    locations: [...]

    - id: 1                # or a bare list of people
      name: Jason Momoa
      parents:
        - id: 3            # embedded record: defines person 3
          name: Mommy Momoa
      birth:
        date: 1982-01-01
        place: {name: Honolulu}   # place without id: matched by name or created

Nested parent/child records are flattened into id references. A bare id
(``3`` or ``{"id": 3}``) is a reference; a mapping with any other key is a
definition. A record may be defined several times only if every definition
is identical.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from mookuauhau.config import DatasetConfig
from mookuauhau.models.location import Location
from mookuauhau.models.person import Person
from mookuauhau.models.results import Dataset
from mookuauhau.utils.exceptions import DatasetError
from mookuauhau.utils.logger import get_logger

logger = get_logger(__name__)

SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}
EVENT_FIELDS = ("birth", "death")


class DatasetLoader:
    """
    Turns a dataset document into validated Person and Location records.

    Usage:
        loader = DatasetLoader(config.dataset)
        dataset = loader.load()                     # config.path
        dataset = loader.load("family.json")
        dataset = loader.load_data({"people": [...]})
    """

    def __init__(self, config: DatasetConfig | None = None):
        """
        Initialize loader.

        Args:
            config: Optional dataset configuration. Uses defaults if not provided.
        """
        self.config = config or DatasetConfig()

    def load(self, path: str | Path | None = None) -> Dataset:
        """
        Load a dataset file.

        Args:
            path: Dataset file; defaults to the configured path

        Returns:
            Loaded dataset

        Raises:
            DatasetError: If the file is missing, unparseable or invalid
        """
        path = Path(path or self.config.path)
        if not path.exists():
            raise DatasetError(f"Dataset file not found: {path}", context={"path": str(path)})

        data_format = self.config.format or SUFFIX_FORMATS.get(path.suffix.lower())
        if data_format is None:
            raise DatasetError(
                f"Cannot detect dataset format of {path}; set dataset.format",
                context={"path": str(path)},
            )

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f) if data_format == "json" else yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DatasetError(
                f"Failed to parse {data_format} dataset {path}: {e}",
                context={"path": str(path), "format": data_format},
            ) from e

        return self.load_data(data, source=str(path))

    def load_data(self, data: Any, source: str = "<memory>") -> Dataset:
        """
        Load a dataset from an already parsed document.

        Args:
            data: Mapping with "people"/"locations" lists, or a list of people
            source: Label used in log and error messages

        Returns:
            Loaded dataset
        """
        if data is None:
            data = {}
        if isinstance(data, list):
            people_raw, locations_raw = data, []
        elif isinstance(data, dict):
            people_raw = data.get("people") or []
            locations_raw = data.get("locations") or data.get("places") or []
        else:
            raise DatasetError(
                f"Dataset {source} must be a mapping or a list, got {type(data).__name__}",
                context={"source": source},
            )

        if not isinstance(people_raw, list) or not isinstance(locations_raw, list):
            raise DatasetError(
                f"Dataset {source}: people and locations must be lists",
                context={"source": source},
            )

        flattener = _Flattener(source)
        for position, raw in enumerate(locations_raw):
            flattener.add_location(raw, f"locations[{position}]")
        for position, raw in enumerate(people_raw):
            if not isinstance(raw, dict):
                raise DatasetError(
                    f"Dataset {source}: people[{position}] must be a mapping",
                    context={"source": source, "position": f"people[{position}]"},
                )
            flattener.add_person(raw, f"people[{position}]")
        flattener.resolve_pending_places()

        dataset = Dataset(
            people=[
                self._validate(Person, record, source, position)
                for record, position in flattener.people()
            ],
            locations=[
                self._validate(Location, record, source, position)
                for record, position in flattener.locations()
            ],
        )
        logger.info(
            f"Loaded dataset from {source}: {len(dataset.people)} people, "
            f"{len(dataset.locations)} locations"
        )
        return dataset

    @staticmethod
    def _validate(model, record: dict, source: str, position: str):
        try:
            return model.model_validate(record)
        except PydanticValidationError as e:
            raise DatasetError(
                f"Invalid {model.__name__.lower()} at {source}:{position}: {e}",
                context={"source": source, "position": position, "id": record.get("id")},
            ) from e


class _Flattener:
    """Collects flat person/location records out of nested input."""

    def __init__(self, source: str):
        self.source = source
        self._people: dict[int, tuple[dict, dict, str]] = {}  # id -> (raw, record, position)
        self._locations: dict[int, tuple[dict, str]] = {}
        self._location_names: dict[str, int] = {}
        self._pending_places: list[tuple[dict, dict, str]] = []

    # ═══════════════════════════════════════════════════════════
    # PEOPLE
    # ═══════════════════════════════════════════════════════════

    def add_person(self, raw: Any, position: str) -> int:
        """Register a person definition or reference and return its id."""
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        if not isinstance(raw, dict):
            raise self._error(f"expected a person id or mapping at {position}", position)

        person_id = self._read_id(raw, position, "person")
        if set(raw) == {"id"}:
            return person_id

        if person_id in self._people:
            if self._people[person_id][0] != raw:
                raise self._error(
                    f"person {person_id} is defined more than once with different data",
                    position,
                )
            return person_id

        record = dict(raw)
        # Reserve the id before recursing so self-references resolve
        self._people[person_id] = (raw, record, position)

        for relation in ("parents", "children"):
            related = raw.get(relation) or []
            if not isinstance(related, list):
                related = [related]
            record[relation] = [
                self.add_person(other, f"{position}.{relation}[{i}]")
                for i, other in enumerate(related)
            ]

        for field in EVENT_FIELDS:
            if isinstance(raw.get(field), dict):
                record[field] = self._event(raw[field], f"{position}.{field}")
        if isinstance(raw.get("events"), list):
            record["events"] = [
                self._event(event, f"{position}.events[{i}]") if isinstance(event, dict) else event
                for i, event in enumerate(raw["events"])
            ]

        return person_id

    def people(self) -> list[tuple[dict, str]]:
        return [(record, position) for _, record, position in self._people.values()]

    # ═══════════════════════════════════════════════════════════
    # LOCATIONS
    # ═══════════════════════════════════════════════════════════

    def add_location(self, raw: Any, position: str) -> int | None:
        """
        Register a location definition or reference.

        Returns:
            Location id, or None when the location has no id yet (pending)
        """
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        if not isinstance(raw, dict):
            raise self._error(f"expected a location id or mapping at {position}", position)

        if "id" not in raw:
            self._pending_places.append(({}, raw, position))
            return None

        location_id = self._read_id(raw, position, "location")
        if set(raw) == {"id"}:
            return location_id

        if location_id in self._locations:
            if self._locations[location_id][0] != raw:
                raise self._error(
                    f"location {location_id} is defined more than once with different data",
                    position,
                )
            return location_id

        self._locations[location_id] = (raw, position)
        if isinstance(raw.get("name"), str):
            self._location_names.setdefault(raw["name"].casefold(), location_id)
        return location_id

    def resolve_pending_places(self) -> None:
        """Give id-less places the id of a same-named location, or a new one."""
        for holder, raw, position in self._pending_places:
            name = raw.get("name")
            if not isinstance(name, str) or not name.strip():
                raise self._error(f"a location without id needs a name at {position}", position)

            location_id = self._location_names.get(name.casefold())
            if location_id is None:
                location_id = max(self._locations, default=0) + 1
                self._locations[location_id] = ({**raw, "id": location_id}, position)
                self._location_names[name.casefold()] = location_id

            if holder:
                holder["place"] = location_id
        self._pending_places.clear()

    def locations(self) -> list[tuple[dict, str]]:
        return [self._locations[i] for i in sorted(self._locations)]

    # ═══════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════

    def _event(self, raw: dict, position: str) -> dict:
        event = dict(raw)
        place = raw.get("place")
        if isinstance(place, dict):
            if "id" in place:
                event["place"] = self.add_location(place, f"{position}.place")
            else:
                event["place"] = None
                self._pending_places.append((event, place, f"{position}.place"))
        return event

    def _read_id(self, raw: dict, position: str, kind: str) -> int:
        value = raw.get("id")
        if not isinstance(value, int) or isinstance(value, bool):
            raise self._error(f"{kind} at {position} needs an integer id, got {value!r}", position)
        return value

    def _error(self, message: str, position: str) -> DatasetError:
        return DatasetError(
            f"Dataset {self.source}: {message}",
            context={"source": self.source, "position": position},
        )
