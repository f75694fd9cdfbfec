"""
Relationship graph over people.

Nodes are person ids, edges are parent/child links treated as undirected
and unweighted, so a shortest path is the smallest number of generational
hops between two people.
"""

from collections import deque

from mookuauhau.core.entity_store.store import EntityStore
from mookuauhau.utils.logger import get_logger

logger = get_logger(__name__)

PARENT = "parent"
CHILD = "child"


class RelationshipGraph:
    """
    Symmetric adjacency built once from a sealed entity store.

    Neighbor tuples are kept in ascending id order, which makes breadth-first
    search visit them deterministically: when several shortest paths exist,
    the same one is returned on every run.
    """

    def __init__(
        self,
        adjacency: dict[int, tuple[int, ...]],
        parents: dict[int, frozenset[int]],
    ):
        """
        Initialize from prepared adjacency. Use build() in normal code.

        Args:
            adjacency: Person id -> sorted neighbor ids (parents and children)
            parents: Person id -> parent ids, used to label path steps
        """
        self._adjacency = adjacency
        self._parents = parents

    @classmethod
    def build(cls, store: EntityStore) -> "RelationshipGraph":
        """
        Build the graph from every person in the store.

        Edges are inserted in both directions regardless of which side of
        the relationship the record listed. People without relationships
        become isolated nodes.
        """
        neighbors: dict[int, set[int]] = {}
        parents: dict[int, set[int]] = {}

        for person in store.iter_people():
            neighbors.setdefault(person.id, set())
            parents.setdefault(person.id, set())
            for parent_id in person.parents:
                neighbors[person.id].add(parent_id)
                neighbors.setdefault(parent_id, set()).add(person.id)
                parents[person.id].add(parent_id)
            for child_id in person.children:
                neighbors[person.id].add(child_id)
                neighbors.setdefault(child_id, set()).add(person.id)
                parents.setdefault(child_id, set()).add(person.id)

        graph = cls(
            adjacency={pid: tuple(sorted(ids)) for pid, ids in neighbors.items()},
            parents={pid: frozenset(ids) for pid, ids in parents.items()},
        )
        logger.info(
            f"Relationship graph built: {graph.node_count} nodes, {graph.edge_count} edges"
        )
        return graph

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._adjacency

    @property
    def node_count(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        """Undirected edge count."""
        return sum(len(ids) for ids in self._adjacency.values()) // 2

    def neighbors(self, person_id: int) -> tuple[int, ...]:
        """Parents and children of a person in ascending id order."""
        return self._adjacency.get(person_id, ())

    def relation(self, from_id: int, to_id: int) -> str | None:
        """
        How to_id relates to from_id.

        Returns:
            "parent" if to_id is a parent of from_id, "child" if it is a child,
            None when they are not directly linked
        """
        if to_id in self._parents.get(from_id, frozenset()):
            return PARENT
        if from_id in self._parents.get(to_id, frozenset()):
            return CHILD
        return None

    def shortest_path(self, start_id: int, end_id: int) -> list[int] | None:
        """
        Find the shortest path between two people (BFS).

        Args:
            start_id: First person
            end_id: Second person

        Returns:
            Person ids from start_id to end_id inclusive, or None if either id
            is not in the graph or no path connects them
        """
        if start_id not in self._adjacency or end_id not in self._adjacency:
            return None

        if start_id == end_id:
            return [start_id]

        predecessors: dict[int, int | None] = {start_id: None}
        queue = deque([start_id])

        while queue:
            current_id = queue.popleft()

            for neighbor_id in self._adjacency[current_id]:
                if neighbor_id in predecessors:
                    continue
                predecessors[neighbor_id] = current_id

                if neighbor_id == end_id:
                    return self._unwind(predecessors, end_id)

                queue.append(neighbor_id)

        return None

    def distance(self, start_id: int, end_id: int) -> int | None:
        """Hop count between two people, or None when unreachable."""
        path = self.shortest_path(start_id, end_id)
        return None if path is None else len(path) - 1

    def component_count(self) -> int:
        """Number of connected components (families with no link between them)."""
        seen: set[int] = set()
        components = 0
        for start_id in self._adjacency:
            if start_id in seen:
                continue
            components += 1
            seen.add(start_id)
            queue = deque([start_id])
            while queue:
                for neighbor_id in self._adjacency[queue.popleft()]:
                    if neighbor_id not in seen:
                        seen.add(neighbor_id)
                        queue.append(neighbor_id)
        return components

    @staticmethod
    def _unwind(predecessors: dict[int, int | None], end_id: int) -> list[int]:
        path = []
        node: int | None = end_id
        while node is not None:
            path.append(node)
            node = predecessors[node]
        path.reverse()
        return path
