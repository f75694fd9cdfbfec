"""
Query Engine - read-only query surface over a loaded family dataset.

Brings together:
- Entity Store (records by id, paged listing)
- Relationship Graph (shortest parent/child paths)
- Search Index (token search over names and descriptions)
"""

from typing import Any

from mookuauhau.config import Config
from mookuauhau.core.entity_store import EntityStore
from mookuauhau.core.graph import RelationshipGraph, validate_lineage
from mookuauhau.core.loader import DatasetLoader
from mookuauhau.core.search import SearchIndex
from mookuauhau.models.location import Location
from mookuauhau.models.person import Person
from mookuauhau.models.results import (
    Dataset,
    PathStep,
    PersonSearchResult,
    PlaceSearchResult,
    RelationshipPath,
)
from mookuauhau.utils.exceptions import NotFoundError, ValidationError
from mookuauhau.utils.logger import get_logger

logger = get_logger(__name__)


class QueryEngine:
    """
    Query engine over an immutable snapshot.

    Features:
    - Person and place lookup by id
    - Paged listing of people in ascending id order
    - Shortest relationship path between two people
    - Full-text search of people and places, plain or paged

    Everything is built before the engine exists and nothing is modified
    afterwards, so one engine can serve concurrent requests without locks.
    """

    def __init__(
        self,
        store: EntityStore,
        graph: RelationshipGraph,
        index: SearchIndex,
        config: Config | None = None,
        lineage_warnings: list[str] | None = None,
    ):
        """
        Initialize Query Engine from built components.

        Args:
            store: Sealed entity store
            graph: Relationship graph built from the store
            index: Search index over the store's records
            config: Configuration object
            lineage_warnings: Warnings reported while building
        """
        self.store = store
        self.graph = graph
        self.index = index
        self.config = config or Config()
        self.lineage_warnings = lineage_warnings or []

    @classmethod
    def from_dataset(cls, dataset: Dataset, config: Config | None = None) -> "QueryEngine":
        """
        Build store, graph and index from a loaded dataset.

        Args:
            dataset: Loaded people and locations
            config: Configuration object

        Returns:
            Ready-to-query engine

        Raises:
            DatasetError: On duplicate ids or dangling references
        """
        config = config or Config()
        logger.info("Building query engine")

        store = EntityStore(repair_relationships=config.dataset.repair_relationships)
        for location in dataset.locations:
            store.add_location(location)
        for person in dataset.people:
            store.add_person(person)
        store.seal()

        graph = RelationshipGraph.build(store)

        index = SearchIndex(config.search)
        for person in store.iter_people():
            index.index_person(person)
        for location in store.iter_locations():
            index.index_location(location)
        logger.info(
            f"Search index built: {index.people_token_count} person tokens, "
            f"{index.place_token_count} place tokens"
        )

        warnings: list[str] = []
        if config.dataset.validate_lineage:
            warnings = validate_lineage(store)
            for warning in warnings:
                logger.warning(warning)

        logger.info("Query engine ready")
        return cls(store, graph, index, config=config, lineage_warnings=warnings)

    @classmethod
    def from_config(cls, config: Config) -> "QueryEngine":
        """Load the configured dataset file and build an engine from it."""
        dataset = DatasetLoader(config.dataset).load()
        return cls.from_dataset(dataset, config)

    # ═══════════════════════════════════════════════════════════
    # LOOKUPS
    # ═══════════════════════════════════════════════════════════

    def get_person(self, person_id: int) -> Person | None:
        """
        Retrieve a person by ID.

        Returns:
            Person or None if not found

        Raises:
            ValidationError: If person_id is not an integer
        """
        self._check_id(person_id, "id")
        person = self.store.get_person(person_id)
        if person is None:
            logger.debug(f"Person not found: {person_id}")
        return person

    def get_place(self, location_id: int) -> Location | None:
        """Retrieve a location by ID, or None if not found."""
        self._check_id(location_id, "id")
        return self.store.get_location(location_id)

    def require_person(self, person_id: int) -> Person:
        """Like get_person, but an unknown id raises NotFoundError."""
        person = self.get_person(person_id)
        if person is None:
            raise NotFoundError(f"Person not found: {person_id}", context={"id": person_id})
        return person

    def require_place(self, location_id: int) -> Location:
        """Like get_place, but an unknown id raises NotFoundError."""
        location = self.get_place(location_id)
        if location is None:
            raise NotFoundError(f"Place not found: {location_id}", context={"id": location_id})
        return location

    def get_people(self, limit: int | None = None, offset: int | None = None) -> list[Person]:
        """
        Paged list of people in ascending id order.

        Args:
            limit: Maximum number of people; None returns everyone from offset on
            offset: Number of people to skip; None means 0

        Returns:
            List of people; empty when offset is past the end

        Raises:
            ValidationError: If limit or offset is negative or not an integer
        """
        offset = self._check_page(limit, offset)
        return self.store.list_people(offset=offset, limit=limit)

    # ═══════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════

    def get_shortest_path(self, person1: int, person2: int) -> list[Person]:
        """
        Shortest parent/child path between two people.

        Returns:
            People from person1 to person2 inclusive; empty when either id is
            unknown or the two are not related

        Raises:
            ValidationError: If an id is not an integer
        """
        self._check_id(person1, "person1")
        self._check_id(person2, "person2")

        path = self.graph.shortest_path(person1, person2)
        if path is None:
            logger.debug(f"No path between {person1} and {person2}")
            return []
        return [self.store.get_person(person_id) for person_id in path]

    def get_relationship(self, person1: int, person2: int) -> RelationshipPath | None:
        """
        Shortest path annotated with how each step relates to the next.

        Returns:
            RelationshipPath, or None when there is no path
        """
        people = self.get_shortest_path(person1, person2)
        if not people:
            return None

        steps = []
        for i, person in enumerate(people):
            relation = None
            if i + 1 < len(people):
                relation = self.graph.relation(person.id, people[i + 1].id)
            steps.append(PathStep(person=person, relation_to_next=relation))

        return RelationshipPath(steps=steps, generations_apart=len(people) - 1)

    # ═══════════════════════════════════════════════════════════
    # SEARCH
    # ═══════════════════════════════════════════════════════════

    def search_people(self, text: str) -> list[Person]:
        """
        Full-text search of people by name.

        Returns:
            People ranked by number of matched query tokens, then id

        Raises:
            ValidationError: If text is empty or whitespace-only
        """
        self._check_text(text)
        return [self.store.get_person(i) for i in self.index.search_people(text)]

    def search_places(self, text: str) -> list[Location]:
        """
        Full-text search of places by name and description.

        Raises:
            ValidationError: If text is empty or whitespace-only
        """
        self._check_text(text)
        return [self.store.get_location(i) for i in self.index.search_places(text)]

    def search_people_page(
        self, text: str, limit: int | None = None, offset: int | None = None
    ) -> PersonSearchResult:
        """Paged people search with total/count/offset bookkeeping."""
        start = self._check_page(limit, offset)
        matches = self.search_people(text)
        page = matches[start : None if limit is None else start + limit]
        return PersonSearchResult(results=page, total=len(matches), count=len(page), offset=start)

    def search_places_page(
        self, text: str, limit: int | None = None, offset: int | None = None
    ) -> PlaceSearchResult:
        """Paged place search with total/count/offset bookkeeping."""
        start = self._check_page(limit, offset)
        matches = self.search_places(text)
        page = matches[start : None if limit is None else start + limit]
        return PlaceSearchResult(results=page, total=len(matches), count=len(page), offset=start)

    # STATISTICS & MONITORING

    def get_statistics(self) -> dict[str, Any]:
        """
        Get engine statistics.

        Returns:
            Statistics dictionary
        """
        return {
            "people": self.store.people_count,
            "locations": self.store.location_count,
            "relationships": {
                "edges": self.graph.edge_count,
                "families": self.graph.component_count(),
            },
            "search": {
                "person_tokens": self.index.people_token_count,
                "place_tokens": self.index.place_token_count,
            },
            "lineage_warnings": len(self.lineage_warnings),
        }

    # VALIDATION HELPERS

    @staticmethod
    def _check_id(value: Any, argument: str) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError(
                f"{argument} must be an integer, got {value!r}",
                context={"argument": argument, "value": value},
            )

    @staticmethod
    def _check_page(limit: Any, offset: Any) -> int:
        """Validate paging arguments and return the effective offset."""
        for argument, value in (("limit", limit), ("offset", offset)):
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(
                    f"{argument} must be an integer, got {value!r}",
                    context={"argument": argument, "value": value},
                )
            if value < 0:
                raise ValidationError(
                    f"{argument} must be non-negative, got {value}",
                    context={"argument": argument, "value": value},
                )
        return offset or 0

    @staticmethod
    def _check_text(text: Any) -> None:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(
                "Search text cannot be empty",
                context={"argument": "text", "value": text},
            )
