"""Match user queries against the fact names known to the loaded definitions."""

from dataclasses import dataclass, field
from typing import Iterable

from .splitter import split_key


@dataclass(frozen=True)
class SearchedFact:
    """A known fact name selected by a user query.

    Attributes:
        name: Fact name to resolve (the query itself when nothing matched).
        user_query: Query that selected this fact, empty for a full listing.
        filter_tokens: Query segments left over after the fact name.
        known: False when the query matched no fact.
    """

    name: str
    user_query: str = ""
    filter_tokens: tuple[str | int, ...] = field(default_factory=tuple)
    known: bool = True


class QueryParser:
    """Resolves queries like ``os.release.major`` to ``os.release`` + ``["major"]``."""

    def __init__(self, names: Iterable[str]) -> None:
        # Keep first-seen order and drop duplicates
        self._names = list(dict.fromkeys(names))

    def parse(self, queries: Iterable[str]) -> list[SearchedFact]:
        """Return the searched facts for ``queries``, or every fact if there are none."""
        queries = list(queries)
        if not queries:
            return [SearchedFact(name=name) for name in self._names]

        searched: list[SearchedFact] = []
        for query in queries:
            searched.extend(self._search(query))
        return searched

    def _search(self, query: str) -> list[SearchedFact]:
        tokens = split_key(query)

        for size in range(len(tokens), 0, -1):
            candidate = ".".join(str(token) for token in tokens[:size])
            remaining = tuple(tokens[size:])

            exact = [name for name in self._names if name == candidate]
            # A group query ("os") selects every fact beneath it
            nested = [] if remaining else [
                name for name in self._names if name.startswith(candidate + ".")
            ]
            if not exact and not nested:
                continue

            return [
                SearchedFact(name=name, user_query=query, filter_tokens=remaining)
                for name in exact
            ] + [
                SearchedFact(name=name, user_query=query)
                for name in nested
            ]

        return [SearchedFact(name=query, user_query=query, known=False)]
