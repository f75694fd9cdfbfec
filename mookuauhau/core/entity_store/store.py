"""
In-memory entity store for people and locations.

The store is the single owner of every record. It is filled once while the
dataset loads, then sealed; after sealing it is read-only and can be shared
between concurrent requests without locking.
"""

from collections.abc import Iterator

from mookuauhau.models.location import Location
from mookuauhau.models.person import Person
from mookuauhau.utils.exceptions import DatasetError, StoreError
from mookuauhau.utils.logger import get_logger

logger = get_logger(__name__)


class EntityStore:
    """
    Canonical Person and Location records keyed by id.

    Features:
    - Lookup by id (absent ids return None)
    - Stable listing in ascending id order with offset/limit paging
    - Reference validation and parent/child reconciliation on seal()
    """

    def __init__(self, repair_relationships: bool = True):
        """
        Initialize an empty store.

        Args:
            repair_relationships: Complete one-sided parent/child links on seal()
                instead of rejecting them
        """
        self.repair_relationships = repair_relationships
        self._people: dict[int, Person] = {}
        self._locations: dict[int, Location] = {}
        self._ordered_ids: tuple[int, ...] = ()
        self._sealed = False

    # ═══════════════════════════════════════════════════════════
    # LOADING
    # ═══════════════════════════════════════════════════════════

    def add_person(self, person: Person) -> None:
        """Add a person. Ids must be unique."""
        self._check_open()
        if person.id in self._people:
            raise DatasetError(
                f"Duplicate person id: {person.id}", context={"person_id": person.id}
            )
        self._people[person.id] = person

    def add_location(self, location: Location) -> None:
        """Add a location. Ids must be unique."""
        self._check_open()
        if location.id in self._locations:
            raise DatasetError(
                f"Duplicate location id: {location.id}", context={"location_id": location.id}
            )
        self._locations[location.id] = location

    def seal(self) -> None:
        """
        Validate references, reconcile parent/child links and freeze the store.

        Raises:
            DatasetError: On dangling references, self-parenting, or one-sided
                links when repair is disabled
        """
        self._check_open()
        self._check_references()
        repaired = self._reconcile_relationships()
        self._ordered_ids = tuple(sorted(self._people))
        self._sealed = True
        logger.info(
            f"Entity store sealed: {len(self._people)} people, "
            f"{len(self._locations)} locations, {repaired} links repaired"
        )

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ═══════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════

    def get_person(self, person_id: int) -> Person | None:
        return self._people.get(person_id)

    def get_location(self, location_id: int) -> Location | None:
        return self._locations.get(location_id)

    def has_person(self, person_id: int) -> bool:
        return person_id in self._people

    def list_people(self, offset: int = 0, limit: int | None = None) -> list[Person]:
        """
        Slice of people in ascending id order.

        Args:
            offset: Number of people to skip (non-negative)
            limit: Maximum number to return, None for all remaining

        Returns:
            List of people; empty when offset is past the end
        """
        if offset < 0 or (limit is not None and limit < 0):
            raise ValueError("offset and limit must be non-negative")
        ids = self._listing_ids()
        end = None if limit is None else offset + limit
        return [self._people[i] for i in ids[offset:end]]

    def iter_people(self) -> Iterator[Person]:
        """People in ascending id order."""
        for person_id in self._listing_ids():
            yield self._people[person_id]

    def iter_locations(self) -> Iterator[Location]:
        """Locations in ascending id order."""
        for location_id in sorted(self._locations):
            yield self._locations[location_id]

    @property
    def people_count(self) -> int:
        return len(self._people)

    @property
    def location_count(self) -> int:
        return len(self._locations)

    # ═══════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════

    def _listing_ids(self) -> tuple[int, ...]:
        if self._sealed:
            return self._ordered_ids
        return tuple(sorted(self._people))

    def _check_open(self) -> None:
        if self._sealed:
            raise StoreError("Entity store is sealed; records cannot be added")

    def _check_references(self) -> None:
        for person in self._people.values():
            for relation in ("parents", "children"):
                for other_id in getattr(person, relation):
                    if other_id == person.id:
                        raise DatasetError(
                            f"Person {person.id} lists itself in {relation}",
                            context={"person_id": person.id, "field": relation},
                        )
                    if other_id not in self._people:
                        raise DatasetError(
                            f"Person {person.id} references unknown person {other_id} "
                            f"in {relation}",
                            context={
                                "person_id": person.id,
                                "field": relation,
                                "missing_id": other_id,
                            },
                        )

            for name in person.names:
                for other_id in [*name.given_by, *name.named_from]:
                    if other_id not in self._people:
                        raise DatasetError(
                            f"Name of person {person.id} references unknown person {other_id}",
                            context={"person_id": person.id, "missing_id": other_id},
                        )

            for event in person.all_events():
                if event.place is not None and event.place not in self._locations:
                    raise DatasetError(
                        f"Event of person {person.id} references unknown location {event.place}",
                        context={"person_id": person.id, "missing_location_id": event.place},
                    )

    def _reconcile_relationships(self) -> int:
        """
        Make parent/child links symmetric.

        Returns:
            Number of links that had to be added
        """
        parents = {pid: set(p.parents) for pid, p in self._people.items()}
        children = {pid: set(p.children) for pid, p in self._people.items()}

        missing: list[tuple[int, str, int]] = []
        for pid, person in self._people.items():
            for parent_id in person.parents:
                if pid not in children[parent_id]:
                    missing.append((parent_id, "children", pid))
            for child_id in person.children:
                if pid not in parents[child_id]:
                    missing.append((child_id, "parents", pid))

        if not missing:
            return 0

        if not self.repair_relationships:
            holder, field, other = missing[0]
            raise DatasetError(
                f"Person {other} is linked to {holder}, but {holder}.{field} "
                f"does not contain {other}",
                context={"person_id": holder, "field": field, "missing_id": other},
            )

        for holder, field, other in missing:
            (children if field == "children" else parents)[holder].add(other)

        for pid, person in list(self._people.items()):
            if set(person.parents) != parents[pid] or set(person.children) != children[pid]:
                self._people[pid] = person.model_copy(
                    update={
                        "parents": sorted(parents[pid]),
                        "children": sorted(children[pid]),
                    }
                )
                logger.debug(f"Repaired parent/child links of person {pid}")

        return len(missing)
