"""Assemble resolved facts into one nested collection."""

import copy
from typing import Any, Iterable

from ..config import FactOptions
from ..logging import FactLogger, get_logger
from ..query.splitter import split_key
from .filter import dig_value
from .models import FactKind, ResolvedFact


class FactCollection(dict):
    """Nested mapping of fact values keyed by dotted-name segments.

    A path holds either a leaf value or a nested mapping, never both. When
    two facts disagree about a path, the first placement is kept and the
    later fact is logged and dropped.
    """

    def __init__(
        self,
        options: FactOptions | None = None,
        logger: FactLogger | None = None,
    ) -> None:
        super().__init__()
        self._options = options or FactOptions()
        self.logger = logger or get_logger()

    def build(self, facts: Iterable[ResolvedFact]) -> "FactCollection":
        """Merge ``facts`` into the collection in order.

        Null-valued facts are skipped. Conflicting facts are logged and
        skipped; they never abort the build.
        """
        for fact in facts:
            if fact.value is None:
                continue

            if not self._bury(self._path_for(fact), fact.value):
                self.logger.log_conflict(fact)

        return self

    def _path_for(self, fact: ResolvedFact) -> list[str]:
        if fact.kind is FactKind.LEGACY:
            name_path = [fact.name]
        elif fact.is_custom and not self._options.structured_external_facts:
            name_path = [fact.name]
        else:
            name_path = fact.name.split(".")

        return name_path + [str(token) for token in fact.filter_tokens]

    def _bury(self, path: list[str], value: Any) -> bool:
        """Store ``value`` at ``path``. Returns False on a leaf/mapping conflict."""
        node: dict = self
        for key in path[:-1]:
            child = node.get(key)
            if child is None:
                child = {}
                node[key] = child
            elif not isinstance(child, dict):
                return False
            node = child

        last = path[-1]
        if isinstance(node.get(last), dict):
            return False

        node[last] = copy.deepcopy(value)
        return True

    def dig(self, *keys: str | int) -> Any:
        """Walk nested mappings and lists by ``keys``. Returns None on a miss."""
        return dig_value(self, keys)

    def value(self, user_query: str) -> Any:
        """Return the value addressed by ``user_query``."""
        if user_query in self:
            return self[user_query]
        return self.dig(*split_key(user_query))
