"""
Relationship graph and lineage checks.

- RelationshipGraph: symmetric parent/child adjacency with BFS shortest paths
- validate_lineage: build-time warnings for cycles and impossible dates
"""

from mookuauhau.core.graph.relationship_graph import CHILD, PARENT, RelationshipGraph
from mookuauhau.core.graph.validation import validate_lineage

__all__ = ["RelationshipGraph", "PARENT", "CHILD", "validate_lineage"]
