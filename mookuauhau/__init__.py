"""Mookuauhau: genealogy query service over people, places and parent/child links."""

__version__ = "1.0.0"
