"""
Search module for token-based full-text queries.

Provides a case-folding whitespace tokenizer and an inverted index with
prefix matching over person names and location names/descriptions.
"""

from mookuauhau.core.search.search_index import SearchIndex, TokenIndex
from mookuauhau.core.search.tokenizer import Tokenizer

__all__ = ["SearchIndex", "TokenIndex", "Tokenizer"]
