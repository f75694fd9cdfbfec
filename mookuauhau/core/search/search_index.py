"""
Inverted token index over person names and location names/descriptions.

A record matches a query when any query token is equal to, or a prefix of,
one of the record's indexed tokens. Matching is per token, not a substring
search over the whole field.
"""

from bisect import bisect_left, insort
from collections import Counter
from collections.abc import Iterator

from mookuauhau.config import SearchConfig
from mookuauhau.core.search.tokenizer import Tokenizer
from mookuauhau.models.location import Location
from mookuauhau.models.person import Person
from mookuauhau.utils.logger import get_logger

logger = get_logger(__name__)


class TokenIndex:
    """Token -> entity id postings with a sorted vocabulary for prefix lookups."""

    def __init__(self, prefix_matching: bool = True):
        self.prefix_matching = prefix_matching
        self._postings: dict[str, set[int]] = {}
        self._vocabulary: list[str] = []

    def add(self, entity_id: int, tokens: set[str]) -> None:
        for token in tokens:
            postings = self._postings.get(token)
            if postings is None:
                self._postings[token] = postings = set()
                insort(self._vocabulary, token)
            postings.add(entity_id)

    def expand(self, query_token: str) -> Iterator[str]:
        """Indexed tokens matched by a query token."""
        if not self.prefix_matching:
            if query_token in self._postings:
                yield query_token
            return

        i = bisect_left(self._vocabulary, query_token)
        while i < len(self._vocabulary) and self._vocabulary[i].startswith(query_token):
            yield self._vocabulary[i]
            i += 1

    def search(self, query_tokens: list[str]) -> list[int]:
        """
        Rank entities by the number of distinct query tokens they match.

        Returns:
            Entity ids by descending match count, then ascending id
        """
        scores: Counter[int] = Counter()
        for query_token in query_tokens:
            matched: set[int] = set()
            for token in self.expand(query_token):
                matched |= self._postings[token]
            scores.update(matched)

        return sorted(scores, key=lambda entity_id: (-scores[entity_id], entity_id))

    @property
    def token_count(self) -> int:
        return len(self._postings)


class SearchIndex:
    """
    Full-text search over people and places.

    Usage:
        index = SearchIndex()
        index.index_person(person)
        index.index_location(location)
        index.search_people("momoa")     # [1, 3]
        index.search_places("hilo bay")  # ids ranked by matched tokens
    """

    def __init__(self, config: SearchConfig | None = None, tokenizer: Tokenizer | None = None):
        """
        Initialize an empty index.

        Args:
            config: Optional search configuration. Uses defaults if not provided.
            tokenizer: Tokenizer shared by indexing and querying
        """
        self.config = config or SearchConfig()
        self.tokenizer = tokenizer or Tokenizer()
        self._people = TokenIndex(prefix_matching=self.config.prefix_matching)
        self._places = TokenIndex(prefix_matching=self.config.prefix_matching)

    def index_person(self, person: Person) -> None:
        """Index the first, middle and last parts of every name."""
        fields = [text for name in person.names for text in name.text_fields()]
        self._people.add(person.id, self.tokenizer.tokenize_all(fields))

    def index_location(self, location: Location) -> None:
        """Index the name and description."""
        tokens = self.tokenizer.tokenize_all([location.name, location.description])
        self._places.add(location.id, tokens)

    def search_people(self, text: str) -> list[int]:
        """
        Search people by name.

        Args:
            text: Query text; empty or whitespace-only text matches nothing

        Returns:
            Person ids by descending match count, then ascending id
        """
        tokens = self.tokenizer.tokenize(text)
        if not tokens:
            return []
        results = self._people.search(tokens)
        logger.debug(f"People search {tokens} matched {len(results)}")
        return results

    def search_places(self, text: str) -> list[int]:
        """
        Search places by name and description.

        Args:
            text: Query text; empty or whitespace-only text matches nothing

        Returns:
            Location ids by descending match count, then ascending id
        """
        tokens = self.tokenizer.tokenize(text)
        if not tokens:
            return []
        results = self._places.search(tokens)
        logger.debug(f"Place search {tokens} matched {len(results)}")
        return results

    @property
    def people_token_count(self) -> int:
        return self._people.token_count

    @property
    def place_token_count(self) -> int:
        return self._places.token_count
