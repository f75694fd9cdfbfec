"""
Dataset loading for Mookuauhau.

Reads JSON or YAML documents (or already parsed data) into validated
Person and Location records.
"""

from mookuauhau.core.loader.dataset_loader import DatasetLoader

__all__ = ["DatasetLoader"]
