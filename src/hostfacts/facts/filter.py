"""Narrow resolved facts to the values their queries ask for."""

from typing import Any, Iterable, Sequence

from ..config import FactOptions
from .models import FactKind, ResolvedFact


def dig_value(value: Any, tokens: Sequence[str | int]) -> Any:
    """Navigate ``value`` by ``tokens``.

    Mappings are looked up by key (an integer token also matches its string
    form), lists by integer index. Returns None when a token does not resolve.
    """
    for token in tokens:
        if isinstance(value, dict):
            if token in value:
                value = value[token]
            elif isinstance(token, int) and str(token) in value:
                value = value[str(token)]
            else:
                return None
        elif isinstance(value, list) and isinstance(token, int) and not isinstance(token, bool):
            if not -len(value) <= token < len(value):
                return None
            value = value[token]
        else:
            return None
    return value


class FactFilter:
    """Applies legacy visibility and query narrowing to resolved facts."""

    def __init__(self, options: FactOptions | None = None) -> None:
        self._options = options or FactOptions()

    def _is_blocked(self, fact: ResolvedFact, active_queries: set[str]) -> bool:
        return (
            fact.kind is FactKind.LEGACY
            and not self._options.show_legacy
            and fact.name not in active_queries
        )

    def filter(
        self, facts: Iterable[ResolvedFact], active_queries: Iterable[str] = ()
    ) -> list[ResolvedFact]:
        """Return the facts that survive filtering.

        Facts with filter tokens come back as copies holding the narrowed
        value. The input facts are not modified.
        """
        queries = set(active_queries)
        result: list[ResolvedFact] = []

        for fact in facts:
            if self._is_blocked(fact, queries):
                continue

            if not fact.filter_tokens:
                result.append(fact)
                continue

            value = dig_value(fact.value, fact.filter_tokens)
            if value is None:
                continue
            result.append(fact.with_value(value))

        return result
