"""
Entity store for Mookuauhau.

Owns every Person and Location record; the relationship graph and search
index only hold ids into it.
"""

from mookuauhau.core.entity_store.store import EntityStore

__all__ = ["EntityStore"]
