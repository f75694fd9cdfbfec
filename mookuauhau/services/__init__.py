"""Services built on top of the core components."""

from mookuauhau.services.query_engine import QueryEngine

__all__ = ["QueryEngine"]
